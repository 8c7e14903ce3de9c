"""
Romanian Weather

Weather data for Romanian cities from two heterogeneous ANM feeds:
- JSON current conditions ("today")
- XML 5-day city forecasts
with tolerant normalization into canonical records and forecast analysis
(averages, extremes, trend, top-N rankings, range and keyword filters).
"""

from .analysis import (
    NO_DATA,
    NO_DATA_TREND,
    InvalidArgumentError,
    NoForecastDataError,
    WeatherAnalysisService,
)
from .config import setup_logging
from .fetcher import FetchError, FetchMetadata, MeteoFetcher, SourceType
from .normalizer import (
    ForecastDay,
    MalformedPayloadError,
    WeatherSnapshot,
    decode_forecast,
    decode_snapshots,
)
from .service import WeatherService

__version__ = "1.0.0"

__all__ = [
    "MeteoFetcher",
    "FetchError",
    "FetchMetadata",
    "SourceType",
    "WeatherSnapshot",
    "ForecastDay",
    "MalformedPayloadError",
    "decode_snapshots",
    "decode_forecast",
    "WeatherService",
    "WeatherAnalysisService",
    "InvalidArgumentError",
    "NoForecastDataError",
    "NO_DATA",
    "NO_DATA_TREND",
    "setup_logging",
]
