"""
Configuration for the Romanian Weather package.

Values are read once from the environment at import time; anything not set
falls back to the defaults below.
"""

import logging
import os
from typing import Optional

# ANM data sources
TODAY_JSON_URL = os.getenv(
    "METEO_TODAY_URL",
    "https://www.meteoromania.ro/wp-json/meteoapi/v2/starea-vremii"
)
FORECAST_XML_URL = os.getenv(
    "METEO_FORECAST_URL",
    "https://www.meteoromania.ro/anm/prognoza-orase-xml.php"
)

# HTTP client
DEFAULT_TIMEOUT = int(os.getenv("METEO_TIMEOUT", "15"))  # seconds
MAX_RETRIES = int(os.getenv("METEO_MAX_RETRIES", "3"))
RETRY_BACKOFF = float(os.getenv("METEO_RETRY_BACKOFF", "0.5"))
USER_AGENT = "RomanianWeather/1.0 (ANM today + forecast feeds)"

# The forecast feed may carry more days than this; extras are dropped
FORECAST_DAYS = 5

LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the package."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format=LOG_FORMAT
    )
