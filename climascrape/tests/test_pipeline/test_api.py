"""Tests for the FastAPI surface."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from climascrape.api import create_app
from climascrape.config.schema import AppConfig
from climascrape.ingest.open_meteo import OpenMeteoClient, OpenMeteoError
from climascrape.ingest.page_fetcher import FetchError, PageFetcher

SCRAPE_PATH = "/api/v1/climatempo/15dias/forquilhinha"


@pytest.fixture
def fetcher(page_html: str) -> MagicMock:
    mock = MagicMock(spec=PageFetcher)
    mock.fetch.return_value = page_html
    return mock


@pytest.fixture
def open_meteo() -> MagicMock:
    return MagicMock(spec=OpenMeteoClient)


@pytest.fixture
def client(fetcher: MagicMock, open_meteo: MagicMock) -> TestClient:
    app = create_app(AppConfig(), fetcher=fetcher, open_meteo=open_meteo)
    return TestClient(app)


class TestHealth:
    def test_ok(self, client: TestClient):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestClimatempo15d:
    def test_defaults(self, client: TestClient, fetcher: MagicMock):
        resp = client.get(SCRAPE_PATH)

        assert resp.status_code == 200
        body = resp.json()
        assert body["city"] == "Forquilhinha"
        assert body["state"] == "SC"
        assert body["source"] == AppConfig().source.url
        assert len(body["days"]) == 4
        fetcher.fetch.assert_called_once_with(AppConfig().source.url)

    def test_query_overrides(self, client: TestClient, fetcher: MagicMock):
        resp = client.get(
            SCRAPE_PATH,
            params={"url": "https://example.com/x", "city": "Criciúma", "state": " "},
        )

        body = resp.json()
        assert body["city"] == "Criciúma"
        assert body["state"] == "SC"
        assert body["source"] == "https://example.com/x"
        fetcher.fetch.assert_called_once_with("https://example.com/x")

    def test_cached_per_key(self, client: TestClient, fetcher: MagicMock):
        client.get(SCRAPE_PATH)
        client.get(SCRAPE_PATH)
        assert fetcher.fetch.call_count == 1

        client.get(SCRAPE_PATH, params={"city": "Outra"})
        assert fetcher.fetch.call_count == 2

    def test_fetch_error_is_bad_gateway(self, client: TestClient, fetcher: MagicMock):
        fetcher.fetch.side_effect = FetchError("HTTP 503 after 3 attempts", 503, 3)

        resp = client.get(SCRAPE_PATH)
        assert resp.status_code == 502
        assert resp.json() == {
            "error": "Falha ao obter dados da Climatempo",
            "details": "HTTP 503 after 3 attempts",
        }

    def test_failures_not_cached(self, client: TestClient, fetcher: MagicMock, page_html: str):
        fetcher.fetch.side_effect = [FetchError("down"), page_html]

        assert client.get(SCRAPE_PATH).status_code == 502
        assert client.get(SCRAPE_PATH).status_code == 200

    def test_details_hidden(self, fetcher: MagicMock, open_meteo: MagicMock):
        config = AppConfig(api={"expose_error_details": False})
        client = TestClient(create_app(config, fetcher=fetcher, open_meteo=open_meteo))
        fetcher.fetch.side_effect = FetchError("secret")

        resp = client.get(SCRAPE_PATH)
        assert resp.status_code == 502
        assert "details" not in resp.json()


class TestOpenMeteoForecast:
    def test_by_coordinates(self, client: TestClient, open_meteo: MagicMock):
        open_meteo.daily_forecast.return_value = [{"date": "2026-10-30"}]

        resp = client.get("/api/v1/forecast", params={"lat": -28.79, "lon": -49.49})
        assert resp.status_code == 200
        body = resp.json()
        assert body["days"] == [{"date": "2026-10-30"}]
        assert body["location"] is None
        open_meteo.daily_forecast.assert_called_once_with(-28.79, -49.49, days=7)
        open_meteo.geocode.assert_not_called()

    def test_by_city(self, client: TestClient, open_meteo: MagicMock):
        open_meteo.geocode.return_value = {
            "name": "Forquilhinha", "latitude": -28.75, "longitude": -49.47,
        }
        open_meteo.daily_forecast.return_value = []

        resp = client.get("/api/v1/forecast", params={"city": "Forquilhinha", "days": 3})
        assert resp.status_code == 200
        assert resp.json()["location"] == "Forquilhinha"
        open_meteo.daily_forecast.assert_called_once_with(-28.75, -49.47, days=3)

    def test_missing_location(self, client: TestClient):
        resp = client.get("/api/v1/forecast")
        assert resp.status_code == 400

    def test_upstream_error(self, client: TestClient, open_meteo: MagicMock):
        open_meteo.daily_forecast.side_effect = OpenMeteoError("HTTP 500")

        resp = client.get("/api/v1/forecast", params={"lat": 0, "lon": 0})
        assert resp.status_code == 502
        assert resp.json()["error"] == "Falha ao obter dados da Open-Meteo"
