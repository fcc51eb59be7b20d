"""Turn card token sequences into scored, deduplicated day records."""

from collections.abc import Iterable, Sequence
from datetime import date

from climascrape.extract import fields
from climascrape.models.forecast import DayForecast, ScoredDay

MAX_DAYS = 15


def completeness_score(record: DayForecast) -> int:
    """Number of populated fields among the ten that matter for dedup."""
    values = (
        record.date,
        record.temp_min_c,
        record.temp_max_c,
        record.rain_mm,
        record.rain_probability_percent,
        record.wind_direction,
        record.wind_kmh,
        record.humidity_min_percent,
        record.humidity_max_percent,
        record.summary,
    )
    return sum(v is not None for v in values)


def build_day(tokens: Sequence[str], today: date | None = None) -> ScoredDay | None:
    """Extract one day from a card's tokens.

    Returns None when the card has no summary, no usable temperature pair,
    or nothing to key it by (date, day number or weekday).
    """
    summary = fields.extract_summary(tokens)
    if summary is None:
        return None

    temps = fields.extract_temperatures(tokens)
    if temps is None:
        return None
    temp_min_c, temp_max_c = temps

    rain = fields.extract_rain(tokens)
    wind_direction, wind_kmh = fields.extract_wind(tokens)

    # A percentage claimed by a rain line is not a humidity reading
    humidity_tokens = [
        t for i, t in enumerate(tokens) if i != rain.probability_index
    ]
    hum_min, hum_max = fields.extract_humidity(humidity_tokens)

    day_number = fields.find_day_number(tokens)
    day_label = fields.find_day_label(tokens)
    date_iso = fields.build_date_iso(day_number, today)
    date_key = date_iso or day_number or day_label
    if date_key is None:
        return None

    record = DayForecast(
        date=date_iso,
        day_label=day_label,
        temp_min_c=temp_min_c,
        temp_max_c=temp_max_c,
        rain_mm=rain.mm,
        rain_probability_percent=rain.probability_percent,
        wind_direction=wind_direction,
        wind_kmh=wind_kmh,
        humidity_min_percent=hum_min,
        humidity_max_percent=hum_max,
        summary=summary,
    )
    return ScoredDay(record=record, date_key=date_key, score=completeness_score(record))


def dedupe_days(candidates: Iterable[ScoredDay]) -> list[DayForecast]:
    """Keep the most complete record per date key.

    Ties keep the first candidate seen.
    """
    by_key: dict[str, ScoredDay] = {}
    for cand in candidates:
        best = by_key.get(cand.date_key)
        if best is None or cand.score > best.score:
            by_key[cand.date_key] = cand
    return [c.record for c in by_key.values()]


def sort_days(days: Iterable[DayForecast]) -> list[DayForecast]:
    """Order by (date, day label); undated records sort first."""
    return sorted(days, key=lambda d: (d.date or "", d.day_label or ""))


def select_days(
    candidates: Iterable[ScoredDay], limit: int = MAX_DAYS
) -> list[DayForecast]:
    return sort_days(dedupe_days(candidates))[:limit]
