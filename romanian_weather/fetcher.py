"""
Feed fetcher module for the Romanian Weather package.

Retrieves the two heterogeneous ANM sources as raw payloads:
- "Today" feed: JSON current conditions for every station city
- "Forecast" feed: XML 5-day forecasts per city

Decoding is left to the normalizer; this module only deals with transport:
- Retry mechanism for transient failures
- Per-request timeout
- Fetch metadata for source health reporting
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import (
    DEFAULT_TIMEOUT,
    FORECAST_XML_URL,
    MAX_RETRIES,
    RETRY_BACKOFF,
    TODAY_JSON_URL,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


class SourceType(Enum):
    """Classification of the upstream feeds."""
    TODAY = "today"        # JSON current conditions
    FORECAST = "forecast"  # XML 5-day forecast


@dataclass
class FetchMetadata:
    """Metadata about a single fetch operation."""
    source_url: str
    source_type: SourceType
    fetch_time: str
    success: bool
    payload_bytes: int
    response_time_ms: int
    error_message: Optional[str]


class FetchError(Exception):
    """Raised when an upstream feed cannot be retrieved."""
    pass


class MeteoFetcher:
    """
    Fetcher for ANM (Romanian National Meteorology Administration) feeds.

    Returns the body of each feed untouched; callers hand it to
    ``decode_snapshots`` / ``decode_forecast``.
    """

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        today_url: str = TODAY_JSON_URL,
        forecast_url: str = FORECAST_XML_URL
    ):
        self.timeout = timeout
        self.today_url = today_url
        self.forecast_url = forecast_url
        self._session = self._create_session()
        self._last_fetch_metadata: Dict[SourceType, FetchMetadata] = {}

    def _create_session(self) -> requests.Session:
        """Create HTTP session with retry strategy for availability."""
        session = requests.Session()

        retry_strategy = Retry(
            total=MAX_RETRIES,
            backoff_factor=RETRY_BACKOFF,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "HEAD"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": "application/json, application/xml, text/xml, */*"
        })

        return session

    def _fetch_raw(self, url: str) -> Tuple[bytes, int]:
        """Fetch raw content with timing."""
        start_time = datetime.utcnow()

        try:
            response = self._session.get(url, timeout=self.timeout, allow_redirects=True)
            response.raise_for_status()

            response_time = int((datetime.utcnow() - start_time).total_seconds() * 1000)
            return response.content, response_time

        except requests.Timeout:
            raise FetchError(f"Request timed out after {self.timeout}s")
        except requests.ConnectionError as e:
            raise FetchError(f"Connection error - source unavailable: {e}")
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            raise FetchError(f"HTTP error {status}")
        except requests.RequestException as e:
            raise FetchError(f"Request failed: {e}")

    def _fetch(self, url: str, source_type: SourceType) -> bytes:
        """Fetch one source and record its metadata."""
        fetch_start = datetime.utcnow()

        try:
            content, response_time = self._fetch_raw(url)
        except FetchError as e:
            self._last_fetch_metadata[source_type] = FetchMetadata(
                source_url=url,
                source_type=source_type,
                fetch_time=fetch_start.isoformat(),
                success=False,
                payload_bytes=0,
                response_time_ms=int((datetime.utcnow() - fetch_start).total_seconds() * 1000),
                error_message=str(e)
            )
            logger.error(f"{source_type.value.capitalize()} fetch failed: {e}")
            raise

        self._last_fetch_metadata[source_type] = FetchMetadata(
            source_url=url,
            source_type=source_type,
            fetch_time=fetch_start.isoformat(),
            success=True,
            payload_bytes=len(content),
            response_time_ms=response_time,
            error_message=None
        )
        logger.info(f"Fetched {source_type.value} feed: {len(content)} bytes in {response_time}ms")
        return content

    def fetch_today(self) -> bytes:
        """Fetch the JSON current-conditions feed."""
        return self._fetch(self.today_url, SourceType.TODAY)

    def fetch_forecast(self) -> bytes:
        """Fetch the XML forecast feed."""
        return self._fetch(self.forecast_url, SourceType.FORECAST)

    def get_source_health(self) -> Dict[SourceType, FetchMetadata]:
        """Get metadata of the last fetch per source."""
        return self._last_fetch_metadata.copy()

    def close(self) -> None:
        """Close HTTP session."""
        self._session.close()
