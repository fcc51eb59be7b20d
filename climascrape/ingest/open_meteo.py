"""Open-Meteo geocoding and daily forecast client."""

import logging

import httpx

logger = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "precipitation_probability_max",
    "wind_speed_10m_max",
)

# WMO weather interpretation codes
WEATHER_CODES: dict[int, str] = {
    0: "Céu limpo",
    1: "Predominantemente limpo",
    2: "Parcialmente nublado",
    3: "Nublado",
    45: "Nevoeiro",
    48: "Nevoeiro com geada",
    51: "Garoa fraca",
    53: "Garoa moderada",
    55: "Garoa intensa",
    56: "Garoa congelante fraca",
    57: "Garoa congelante intensa",
    61: "Chuva fraca",
    63: "Chuva moderada",
    65: "Chuva forte",
    66: "Chuva congelante fraca",
    67: "Chuva congelante forte",
    71: "Neve fraca",
    73: "Neve moderada",
    75: "Neve forte",
    77: "Grãos de neve",
    80: "Pancadas de chuva fracas",
    81: "Pancadas de chuva moderadas",
    82: "Pancadas de chuva violentas",
    85: "Pancadas de neve fracas",
    86: "Pancadas de neve fortes",
    95: "Trovoada",
    96: "Trovoada com granizo fraco",
    99: "Trovoada com granizo forte",
}
UNKNOWN_WEATHER = "Desconhecido"


class OpenMeteoError(Exception):
    """Raised when an Open-Meteo call fails or returns nothing usable."""


def describe_weather_code(code: int | None) -> str:
    if code is None:
        return UNKNOWN_WEATHER
    return WEATHER_CODES.get(int(code), UNKNOWN_WEATHER)


class OpenMeteoClient:
    def __init__(
        self,
        geocoding_url: str = GEOCODING_URL,
        forecast_url: str = FORECAST_URL,
        timeout: float = 15.0,
        language: str = "pt",
    ):
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url
        self.timeout = timeout
        self.language = language

    def _get(self, url: str, params: dict) -> dict:
        try:
            resp = httpx.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            logger.error("Open-Meteo %s returned %d", url, e.response.status_code)
            raise OpenMeteoError(f"HTTP {e.response.status_code} from {url}") from e
        except httpx.RequestError as e:
            logger.error("Open-Meteo request to %s failed: %s", url, e)
            raise OpenMeteoError(f"Request failed: {e}") from e
        except ValueError as e:
            logger.error("Open-Meteo %s returned invalid JSON: %s", url, e)
            raise OpenMeteoError(f"Invalid JSON from {url}") from e

    def geocode(self, name: str) -> dict:
        """Resolve a place name to its best match (name, latitude, longitude, ...)."""
        data = self._get(
            self.geocoding_url,
            {"name": name, "count": 1, "language": self.language, "format": "json"},
        )
        results = data.get("results") or []
        if not results:
            raise OpenMeteoError(f"No location found for {name!r}")
        return results[0]

    def daily_forecast(
        self, latitude: float, longitude: float, days: int = 7, timezone: str = "auto"
    ) -> list[dict]:
        """Daily forecast rows with the weather code mapped to a description."""
        data = self._get(
            self.forecast_url,
            {
                "latitude": latitude,
                "longitude": longitude,
                "daily": ",".join(DAILY_FIELDS),
                "forecast_days": days,
                "timezone": timezone,
            },
        )
        daily = data.get("daily", {})
        dates = daily.get("time", [])

        def column(name: str) -> list:
            values = daily.get(name) or []
            return values + [None] * (len(dates) - len(values))

        codes = column("weather_code")
        t_max = column("temperature_2m_max")
        t_min = column("temperature_2m_min")
        rain = column("precipitation_sum")
        rain_prob = column("precipitation_probability_max")
        wind = column("wind_speed_10m_max")

        rows = []
        for i, day in enumerate(dates):
            rows.append({
                "date": day,
                "weather_code": codes[i],
                "description": describe_weather_code(codes[i]),
                "temp_max_c": t_max[i],
                "temp_min_c": t_min[i],
                "rain_mm": rain[i],
                "rain_probability_percent": rain_prob[i],
                "wind_kmh": wind[i],
            })
        return rows
