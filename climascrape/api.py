"""Forecast API: FastAPI surface for the 15-day scraper and Open-Meteo lookups."""

import logging
import os

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from climascrape.cache import TTLCache, make_key
from climascrape.config.loader import load_config
from climascrape.config.schema import AppConfig
from climascrape.ingest.open_meteo import OpenMeteoClient, OpenMeteoError
from climascrape.ingest.page_fetcher import PageFetcher
from climascrape.pipeline.forecast_pipeline import extract_forecast

logger = logging.getLogger(__name__)

CONFIG_ENV = "CLIMASCRAPE_CONFIG"


def _presence(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def create_app(
    config: AppConfig | None = None,
    fetcher: PageFetcher | None = None,
    open_meteo: OpenMeteoClient | None = None,
) -> FastAPI:
    config = config or AppConfig()
    fetcher = fetcher or PageFetcher(config.http)
    open_meteo = open_meteo or OpenMeteoClient()
    cache = TTLCache(ttl_seconds=config.cache.ttl_minutes * 60)

    app = FastAPI(title="Climascrape Forecast API", version="0.1.0")

    def _error(message: str, e: Exception) -> JSONResponse:
        body = {"error": message}
        if config.api.expose_error_details:
            body["details"] = str(e)
        return JSONResponse(status_code=502, content=body)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/v1/climatempo/15dias/forquilhinha")
    def climatempo_15d(
        url: str | None = None,
        city: str | None = None,
        state: str | None = None,
    ):
        """15-day forecast scraped from Climatempo, cached per (url, city, state)."""
        url = _presence(url) or config.source.url
        city = _presence(city) or config.source.city
        state = _presence(state) or config.source.state

        try:
            return cache.fetch(
                make_key(url, city, state),
                lambda: extract_forecast(
                    url, city, state,
                    fetcher=fetcher,
                    max_days=config.extraction.max_days,
                ).to_dict(),
            )
        except Exception as e:
            logger.error("climatempo_15d failed: %s: %s", type(e).__name__, e)
            return _error("Falha ao obter dados da Climatempo", e)

    @app.get("/api/v1/forecast")
    def forecast(
        lat: float | None = Query(default=None, ge=-90, le=90),
        lon: float | None = Query(default=None, ge=-180, le=180),
        city: str | None = None,
        days: int = Query(default=7, ge=1, le=16),
    ):
        """Daily forecast from Open-Meteo by coordinates or place name."""
        location = None
        city = _presence(city)
        if lat is None or lon is None:
            if city is None:
                raise HTTPException(
                    status_code=400, detail="Provide lat and lon, or city"
                )
        try:
            if lat is None or lon is None:
                location = open_meteo.geocode(city)
                lat, lon = location["latitude"], location["longitude"]
            rows = open_meteo.daily_forecast(lat, lon, days=days)
        except OpenMeteoError as e:
            logger.error("forecast failed: %s", e)
            return _error("Falha ao obter dados da Open-Meteo", e)

        return {
            "latitude": lat,
            "longitude": lon,
            "location": location.get("name") if location else None,
            "days": rows,
        }

    return app


app = create_app(load_config(os.environ.get(CONFIG_ENV)))


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
