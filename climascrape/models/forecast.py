"""Daily forecast records extracted from the 15-day page."""

from dataclasses import dataclass, field
from enum import StrEnum


class CompassPoint(StrEnum):
    N = "N"
    NNE = "NNE"
    NE = "NE"
    ENE = "ENE"
    E = "E"
    ESE = "ESE"
    SE = "SE"
    SSE = "SSE"
    S = "S"
    SSW = "SSW"
    SW = "SW"
    WSW = "WSW"
    W = "W"
    WNW = "WNW"
    NW = "NW"
    NNW = "NNW"


@dataclass(frozen=True)
class DayForecast:
    temp_min_c: int
    temp_max_c: int
    summary: str
    date: str | None = None  # YYYY-MM-DD
    day_label: str | None = None
    rain_mm: float | None = None
    rain_probability_percent: int | None = None
    wind_direction: CompassPoint | None = None
    wind_kmh: float | None = None
    humidity_min_percent: int | None = None
    humidity_max_percent: int | None = None

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "day_label": self.day_label,
            "temp_min_c": self.temp_min_c,
            "temp_max_c": self.temp_max_c,
            "rain_mm": self.rain_mm,
            "rain_probability_percent": self.rain_probability_percent,
            "wind_direction": (
                self.wind_direction.value if self.wind_direction is not None else None
            ),
            "wind_kmh": self.wind_kmh,
            "humidity_min_percent": self.humidity_min_percent,
            "humidity_max_percent": self.humidity_max_percent,
            "summary": self.summary,
        }


@dataclass(frozen=True)
class ScoredDay:
    """A candidate record with its dedup key and completeness score."""

    record: DayForecast
    date_key: str
    score: int


@dataclass(frozen=True)
class ForecastResult:
    city: str
    state: str
    source_url: str
    days: tuple[DayForecast, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "city": self.city,
            "state": self.state,
            "source": self.source_url,
            "days": [d.to_dict() for d in self.days],
        }
