"""Forecast pipeline: fetch, parse, extract and select the 15-day forecast."""

import logging
import traceback
from datetime import date

from climascrape.config.schema import HttpConfig
from climascrape.extract.blocks import locate_blocks, parse_document
from climascrape.extract.records import MAX_DAYS, build_day, select_days
from climascrape.ingest.page_fetcher import PageFetcher
from climascrape.models.forecast import DayForecast, ForecastResult

logger = logging.getLogger(__name__)

BACKTRACE_FRAMES = 5


def extract_days(
    html: str, today: date | None = None, max_days: int = MAX_DAYS
) -> list[DayForecast]:
    """Run block location and field extraction over raw page markup."""
    soup = parse_document(html)
    candidates = []
    for tokens in locate_blocks(soup):
        day = build_day(tokens, today)
        if day is not None:
            candidates.append(day)
    return select_days(candidates, max_days)


def extract_forecast(
    url: str,
    city: str,
    state: str,
    *,
    fetcher: PageFetcher | None = None,
    http: HttpConfig | None = None,
    max_days: int = MAX_DAYS,
    today: date | None = None,
) -> ForecastResult:
    """Fetch the page at url and extract up to max_days daily records.

    Raises FetchError when every fetch attempt failed. An empty days list
    means no card could be read; it is logged but not raised.
    """
    fetcher = fetcher or PageFetcher(http)
    html = fetcher.fetch(url)

    try:
        days = extract_days(html, today, max_days)
    except Exception as e:
        frames = traceback.format_tb(e.__traceback__)[:BACKTRACE_FRAMES]
        logger.error("Extraction failed for %s: %s: %s", url, type(e).__name__, e)
        logger.error(
            "backtrace: %s", " | ".join(f.strip().replace("\n", " ") for f in frames)
        )
        raise

    if not days:
        logger.warning(
            "No days extracted; page structure may have changed. url=%s", url
        )
    else:
        logger.info("Extracted %d days for %s/%s", len(days), city, state)

    return ForecastResult(city=city, state=state, source_url=url, days=tuple(days))
