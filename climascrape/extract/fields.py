"""Heuristic field extractors for one forecast card.

Every extractor works on the ordered tokens of a single card. Fallback chains
are expressed as tuples of named strategies tried in priority order; the first
one returning a value wins.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from climascrape.extract.blocks import DEGREE
from climascrape.models.forecast import CompassPoint

Tokens = Sequence[str]

WEEKDAY_LABELS = ("Dom", "Seg", "Ter", "Qua", "Qui", "Sex", "Sáb")
WEATHER_KEYWORDS = ("Sol", "Nublado", "Chuva", "Garoa", "céu", "nebulosidade")

SUMMARY_MIN_CHARS = 12
SUMMARY_MAX_CHARS = 220
# Days this far behind today are assumed to belong to next month
ROLLOVER_DAYS = 16

_WEEKDAY_RE = re.compile(r"\b(?:" + "|".join(WEEKDAY_LABELS) + r")\b", re.IGNORECASE)
_KEYWORD_RE = re.compile("|".join(WEATHER_KEYWORDS), re.IGNORECASE)
_KEYWORDS_FOLDED = {k.casefold() for k in WEATHER_KEYWORDS}

_TEMP_RE = re.compile(r"(-?\d{1,2})(?:[.,]\d+)?\s*" + DEGREE)

_MM_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*mm\b", re.IGNORECASE)
_PCT_RE = re.compile(r"\b(\d{1,3})\s*%")
_RAIN_WORD_RE = re.compile(r"\b(?:chuva|prob|probabilidade)\b", re.IGNORECASE)
RAIN_MM_WINDOW = 6
RAIN_PCT_WINDOW = 6
RAIN_PCT_LOOKBEHIND = 3
RAIN_WORD_WINDOW = 10

# Longest abbreviations first so "NE" is not read as "N"
_COMPASS_RE = re.compile(
    r"\b("
    + "|".join(sorted((c.value for c in CompassPoint), key=len, reverse=True))
    + r")\b",
    re.IGNORECASE,
)
_KMH_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*km/h", re.IGNORECASE)
_KMH_MARK_RE = re.compile(r"km/h", re.IGNORECASE)
WIND_WINDOW = 4

_HUMIDITY_TOKEN_RE = re.compile(r"^\d{1,3}%$")
_INLINE_PCT_RE = re.compile(r"(\d{1,3})\s*%")

_DAY_NUMBER_RE = re.compile(r"^(0?[1-9]|[12]\d|3[01])$")


def _first_result(strategies: Sequence[Callable], tokens: Tokens):
    for strategy in strategies:
        result = strategy(tokens)
        if result is not None:
            return result
    return None


def _to_float(raw: str) -> float:
    return float(raw.replace(",", "."))


# ── Summary ─────────────────────────────────────────────────────


def summary_with_weekday(tokens: Tokens) -> str | None:
    for t in tokens:
        if _WEEKDAY_RE.search(t) and _KEYWORD_RE.search(t):
            return t
    return None


def summary_descriptive(tokens: Tokens) -> str | None:
    for t in tokens:
        if _KEYWORD_RE.search(t) and SUMMARY_MIN_CHARS <= len(t) <= SUMMARY_MAX_CHARS:
            return t
    return None


def summary_bare_keyword(tokens: Tokens) -> str | None:
    """A token that is nothing but a condition word, e.g. "Sol"."""
    for t in tokens:
        if t.casefold() in _KEYWORDS_FOLDED:
            return t
    return None


SUMMARY_STRATEGIES = (summary_with_weekday, summary_descriptive, summary_bare_keyword)


def extract_summary(tokens: Tokens) -> str | None:
    return _first_result(SUMMARY_STRATEGIES, tokens)


# ── Temperature ─────────────────────────────────────────────────


def parse_temperature(text: str) -> int | None:
    """Integer degrees from "15°", "15,7°" or "-1 °". Fractions are truncated."""
    m = _TEMP_RE.search(text)
    if m is None:
        return None
    return int(m.group(1))


def closest_degree_pair(tokens: Tokens) -> tuple[str, str] | None:
    """The two adjacent degree tokens with the smallest index gap."""
    idxs = [i for i, t in enumerate(tokens) if DEGREE in t]
    if len(idxs) < 2:
        return None

    best = (idxs[0], idxs[1])
    for i1, i2 in zip(idxs[1:], idxs[2:]):
        if i2 - i1 < best[1] - best[0]:
            best = (i1, i2)
    return tokens[best[0]], tokens[best[1]]


def extract_temperatures(tokens: Tokens) -> tuple[int, int] | None:
    """(min, max) in Celsius, or None when no usable pair exists."""
    pair = closest_degree_pair(tokens)
    if pair is None:
        return None
    t1 = parse_temperature(pair[0])
    t2 = parse_temperature(pair[1])
    if t1 is None or t2 is None:
        return None
    return min(t1, t2), max(t1, t2)


# ── Rain ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RainLine:
    text: str
    # Token that supplied the percentage, set only when the line has rain
    # context (an mm amount or a rain label) so humidity can skip it
    probability_index: int | None = None


@dataclass(frozen=True)
class RainReading:
    mm: float | None = None
    probability_percent: int | None = None
    probability_index: int | None = None


def _first_pct_index(tokens: Tokens, start: int, stop: int) -> int | None:
    for i in range(start, min(stop, len(tokens))):
        if _PCT_RE.search(tokens[i]):
            return i
    return None


def rain_single_token(tokens: Tokens) -> RainLine | None:
    for i, t in enumerate(tokens):
        if _MM_RE.search(t) and _PCT_RE.search(t):
            return RainLine(t, i)
    return None


def rain_window_from_mm(tokens: Tokens) -> RainLine | None:
    for i, t in enumerate(tokens):
        if not _MM_RE.search(t):
            continue
        window = " ".join(tokens[i:i + RAIN_MM_WINDOW])
        if _PCT_RE.search(window):
            return RainLine(window, _first_pct_index(tokens, i, i + RAIN_MM_WINDOW))
    return None


def rain_window_around_pct(tokens: Tokens) -> RainLine | None:
    for i, t in enumerate(tokens):
        if not _PCT_RE.search(t):
            continue
        start = max(i - RAIN_PCT_LOOKBEHIND, 0)
        window = " ".join(tokens[start:start + RAIN_PCT_WINDOW])
        if _MM_RE.search(window):
            return RainLine(window, _first_pct_index(tokens, start, start + RAIN_PCT_WINDOW))
    return None


def rain_window_from_keyword(tokens: Tokens) -> RainLine | None:
    """Window after a "Chuva"/"Prob" label; needs at least a percentage."""
    for i, t in enumerate(tokens):
        if not _RAIN_WORD_RE.search(t):
            continue
        window = " ".join(tokens[i:i + RAIN_WORD_WINDOW])
        if _PCT_RE.search(window):
            return RainLine(window, _first_pct_index(tokens, i, i + RAIN_WORD_WINDOW))
    return None


def rain_first_mm_and_pct(tokens: Tokens) -> RainLine | None:
    mm_token = next((t for t in tokens if _MM_RE.search(t)), None)
    pct_index = _first_pct_index(tokens, 0, len(tokens))
    if mm_token is None or pct_index is None:
        return None
    return RainLine(f"{mm_token} - {tokens[pct_index]}", pct_index)


def rain_pct_only(tokens: Tokens) -> RainLine | None:
    """Any percentage at all; it may equally be a humidity reading."""
    pct_index = _first_pct_index(tokens, 0, len(tokens))
    if pct_index is None:
        return None
    return RainLine(tokens[pct_index])


def rain_mm_only(tokens: Tokens) -> RainLine | None:
    for t in tokens:
        if _MM_RE.search(t):
            return RainLine(t)
    return None


RAIN_STRATEGIES = (
    rain_single_token,
    rain_window_from_mm,
    rain_window_around_pct,
    rain_window_from_keyword,
    rain_first_mm_and_pct,
    rain_pct_only,
    rain_mm_only,
)


def find_rain_line(tokens: Tokens) -> RainLine | None:
    return _first_result(RAIN_STRATEGIES, tokens)


def parse_rain(text: str | None) -> tuple[float | None, int | None]:
    """(mm, probability) from a rain line; the probability is clamped to 0..100."""
    if not text:
        return None, None
    mm_match = _MM_RE.search(text)
    pct_match = _PCT_RE.search(text)
    mm = _to_float(mm_match.group(1)) if mm_match else None
    prob = min(max(int(pct_match.group(1)), 0), 100) if pct_match else None
    return mm, prob


def extract_rain(tokens: Tokens) -> RainReading:
    line = find_rain_line(tokens)
    if line is None:
        return RainReading()
    mm, prob = parse_rain(line.text)
    return RainReading(
        mm=mm,
        probability_percent=prob,
        probability_index=line.probability_index if prob is not None else None,
    )


# ── Wind ────────────────────────────────────────────────────────


def wind_token_with_direction(tokens: Tokens) -> str | None:
    for t in tokens:
        if _KMH_MARK_RE.search(t) and _COMPASS_RE.search(t):
            return t
    return None


def wind_compass_window(tokens: Tokens) -> str | None:
    """A bare compass token shortly before the card's first km/h reading."""
    kmh_index = next(
        (i for i, t in enumerate(tokens) if _KMH_MARK_RE.search(t)), None
    )
    if kmh_index is None:
        return None
    for i in range(max(kmh_index - WIND_WINDOW + 1, 0), kmh_index + 1):
        if tokens[i].upper() in CompassPoint.__members__:
            return " ".join(tokens[i:i + WIND_WINDOW])
    return None


def wind_speed_token(tokens: Tokens) -> str | None:
    for t in tokens:
        if _KMH_MARK_RE.search(t):
            return t
    return None


WIND_STRATEGIES = (wind_token_with_direction, wind_compass_window, wind_speed_token)


def find_wind_line(tokens: Tokens) -> str | None:
    return _first_result(WIND_STRATEGIES, tokens)


def parse_wind(text: str | None) -> tuple[CompassPoint | None, float | None]:
    if not text:
        return None, None
    dir_match = _COMPASS_RE.search(text)
    kmh_match = _KMH_RE.search(text)
    direction = CompassPoint(dir_match.group(1).upper()) if dir_match else None
    kmh = _to_float(kmh_match.group(1)) if kmh_match else None
    return direction, kmh


def extract_wind(tokens: Tokens) -> tuple[CompassPoint | None, float | None]:
    return parse_wind(find_wind_line(tokens))


# ── Humidity ────────────────────────────────────────────────────


def humidity_exact_tokens(tokens: Tokens) -> list[str] | None:
    values = [t.rstrip("%") for t in tokens if _HUMIDITY_TOKEN_RE.match(t.strip())]
    return values or None


def humidity_inline(tokens: Tokens) -> list[str] | None:
    values = list(dict.fromkeys(_INLINE_PCT_RE.findall(" ".join(tokens))))
    return values or None


HUMIDITY_STRATEGIES = (humidity_exact_tokens, humidity_inline)


def extract_humidity(tokens: Tokens) -> tuple[int | None, int | None]:
    raw = _first_result(HUMIDITY_STRATEGIES, tokens) or []
    values = [v for v in (int(r) for r in raw) if v <= 100]
    if not values:
        return None, None
    return min(values), max(values)


# ── Date / day label ────────────────────────────────────────────


def find_day_number(tokens: Tokens) -> str | None:
    for t in tokens:
        if _DAY_NUMBER_RE.match(t):
            return t
    return None


def find_day_label(tokens: Tokens) -> str | None:
    for t in tokens:
        if t in WEEKDAY_LABELS:
            return t
    return None


def build_date_iso(day_number: str | None, today: date | None = None) -> str | None:
    """ISO date for a day-of-month inside the current 15-day window.

    Assumes the current month unless the day is more than ROLLOVER_DAYS behind
    today, in which case it is taken as next month. This is an approximation:
    it can pick the wrong month near the end of short or long months.
    """
    if day_number is None or not _DAY_NUMBER_RE.match(day_number):
        return None
    day = int(day_number)
    today = today or date.today()
    year, month = today.year, today.month

    if day < today.day - ROLLOVER_DAYS:
        month += 1
        if month > 12:
            month = 1
            year += 1

    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None
