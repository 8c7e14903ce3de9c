"""
Weather service module for the Romanian Weather package.

Glues the fetcher to the normalizer. Nothing is cached: every call
re-fetches the upstream feed and re-decodes it.
"""

import logging
from typing import Dict, List, Optional

from .analysis import require_city
from .fetcher import MeteoFetcher
from .normalizer import (
    ForecastDay,
    WeatherSnapshot,
    city_key,
    decode_forecast,
    decode_snapshots,
)

logger = logging.getLogger(__name__)


class WeatherService:
    """Current conditions and 5-day forecasts for Romanian cities."""

    def __init__(self, fetcher: Optional[MeteoFetcher] = None):
        self.fetcher = fetcher or MeteoFetcher()

    def get_today_weather(self) -> List[WeatherSnapshot]:
        """Get today's conditions for every city in the feed, in feed order."""
        return decode_snapshots(self.fetcher.fetch_today())

    def get_weather_by_city(self, city: str) -> Optional[WeatherSnapshot]:
        """
        Get today's conditions for one city, or None if the feed lacks it.

        Raises:
            InvalidArgumentError: city is empty or whitespace.
        """
        require_city(city)
        by_city: Dict[str, WeatherSnapshot] = {}
        for snapshot in self.get_today_weather():
            by_city.setdefault(city_key(snapshot.city), snapshot)

        snapshot = by_city.get(city_key(city))
        if snapshot is None:
            logger.info(f"No current conditions for city: {city}")
        return snapshot

    def get_5day_forecast(self, city: str) -> List[ForecastDay]:
        """
        Get up to five forecast days for a city.

        Raises:
            InvalidArgumentError: city is empty or whitespace.
        """
        require_city(city)
        forecast = decode_forecast(self.fetcher.fetch_forecast(), city)
        if not forecast:
            logger.info(f"No forecast found for city: {city}")
        return forecast

    def close(self) -> None:
        self.fetcher.close()

