"""Forecast page fetcher with linear-backoff retries."""

import logging
import time

import httpx

from climascrape.config.schema import HttpConfig

logger = logging.getLogger(__name__)

SNIPPET_CHARS = 600


class FetchError(Exception):
    """Raised when every fetch attempt failed."""

    def __init__(
        self, message: str, status_code: int | None = None, attempts: int = 0
    ):
        super().__init__(message)
        self.status_code = status_code
        self.attempts = attempts


class PageFetcher:
    def __init__(self, config: HttpConfig | None = None):
        self.config = config or HttpConfig()

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.config.connect_timeout_s,
            write=self.config.write_timeout_s,
            read=self.config.read_timeout_s,
            pool=self.config.read_timeout_s,
        )

    def fetch(self, url: str) -> str:
        """GET a page and return its body.

        Non-2xx responses and network errors are retried up to max_retries
        times, sleeping backoff_seconds * attempt after each failure.
        """
        max_retries = self.config.max_retries
        last_status: int | None = None
        last_error: httpx.RequestError | None = None

        with httpx.Client(
            headers=self.config.headers(),
            timeout=self._timeout(),
            follow_redirects=True,
            max_redirects=self.config.max_redirects,
        ) as client:
            for attempt in range(1, max_retries + 1):
                try:
                    resp = client.get(url)
                    if resp.is_success:
                        return resp.text
                    last_status = resp.status_code
                    last_error = None
                    logger.error(
                        "HTTP %d from %s (attempt %d/%d) | snippet=%r",
                        resp.status_code, url, attempt, max_retries,
                        resp.text[:SNIPPET_CHARS],
                    )
                except httpx.RequestError as e:
                    last_error = e
                    last_status = None
                    logger.error(
                        "Request to %s failed (attempt %d/%d): %s: %s",
                        url, attempt, max_retries, type(e).__name__, e,
                    )
                time.sleep(self.config.backoff_seconds * attempt)

        if last_error is not None:
            message = f"Request failed after {max_retries} attempts: {last_error}"
        else:
            message = f"HTTP {last_status} after {max_retries} attempts"
        logger.error("Giving up on %s: %s", url, message)
        raise FetchError(message, last_status, max_retries) from last_error
