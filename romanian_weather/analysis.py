"""
Analysis module for the Romanian Weather package.

Stateless statistics over one city's forecast days:
- Averages of daily mean, minimum and maximum temperatures
- Hottest / coldest day
- Keyword classification of sunny and cloudy days
- Temperature trend direction
- Top-N rankings and temperature range filtering

Operations with nothing to work on do not all report it the same way:
averages and extremes return NO_DATA, the trend returns NO_DATA_TREND,
keyword and range filters return an empty list, and top-N rankings raise
NoForecastDataError. Callers rely on each of these.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from .normalizer import ForecastDay

logger = logging.getLogger(__name__)

NO_DATA = None
NO_DATA_TREND = "No data"

TREND_RISING = "Rising"
TREND_FALLING = "Falling"
TREND_STABLE = "Stable/Mixed"

SUNNY_KEYWORDS = ("CER SENIN", "CER VARIABIL", "CER PARTIAL NOROS", "CER TEMPORAR NOROS")
CLOUDY_KEYWORDS = ("CER MAI NOROS", "CER MAI MULT NOROS")


class InvalidArgumentError(ValueError):
    """Raised when an operation argument is out of its allowed range."""

    def __init__(self, message: str, param_name: Optional[str] = None):
        super().__init__(message)
        self.param_name = param_name


class NoForecastDataError(LookupError):
    """Raised by rankings when a city has no forecast days."""
    pass


def require_city(city: Optional[str]) -> str:
    """Reject empty or whitespace-only city names."""
    if not isinstance(city, str) or not city.strip():
        raise InvalidArgumentError("City cannot be null or empty", param_name="city")
    return city


# =============================================================================
# Pure helpers over forecast days
# =============================================================================

def daily_average(day: ForecastDay) -> float:
    return (day.temperature_min + day.temperature_max) / 2.0


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return NO_DATA
    return sum(values) / len(values)


def matches_any(description: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring match of any keyword in a description."""
    folded = description.casefold()
    return any(keyword.casefold() in folded for keyword in keywords)


def classify_trend(averages: Sequence[float], threshold: float) -> str:
    """
    Classify consecutive daily averages as rising, falling or neither.

    A step larger than threshold rules out falling, a step below -threshold
    rules out rising, and a step within the threshold rules out both. With
    fewer than two values nothing is ruled out and the result is Rising.
    """
    rising = True
    falling = True

    for previous, current in zip(averages, averages[1:]):
        diff = current - previous
        if diff > threshold:
            falling = False
        elif diff < -threshold:
            rising = False
        else:
            rising = False
            falling = False

    if rising:
        return TREND_RISING
    if falling:
        return TREND_FALLING
    return TREND_STABLE


class WeatherAnalysisService:
    """
    Forecast statistics for a named city.

    ``forecast_source`` is anything with a ``get_5day_forecast(city)``
    method returning ForecastDay records, normally a WeatherService.
    Arguments are validated before the forecast is fetched.
    """

    def __init__(self, forecast_source):
        self.forecast_source = forecast_source

    def _forecast(self, city: str) -> List[ForecastDay]:
        return list(self.forecast_source.get_5day_forecast(city) or [])

    # =========================================================================
    # Averages and extremes
    # =========================================================================

    def average_temperature(self, city: str) -> Optional[float]:
        """Mean of the daily (min + max) / 2 values, or NO_DATA."""
        require_city(city)
        return _mean([daily_average(d) for d in self._forecast(city)])

    def average_min_temperature(self, city: str) -> Optional[float]:
        require_city(city)
        return _mean([d.temperature_min for d in self._forecast(city)])

    def average_max_temperature(self, city: str) -> Optional[float]:
        require_city(city)
        return _mean([d.temperature_max for d in self._forecast(city)])

    def hottest_day(self, city: str) -> Optional[ForecastDay]:
        """Day with the highest maximum; the earliest one wins ties."""
        require_city(city)
        forecast = self._forecast(city)
        if not forecast:
            return NO_DATA
        return max(forecast, key=lambda d: d.temperature_max)

    def coldest_day(self, city: str) -> Optional[ForecastDay]:
        """Day with the lowest minimum; the earliest one wins ties."""
        require_city(city)
        forecast = self._forecast(city)
        if not forecast:
            return NO_DATA
        return min(forecast, key=lambda d: d.temperature_min)

    # =========================================================================
    # Classification
    # =========================================================================

    def sunny_days(self, city: str) -> List[ForecastDay]:
        require_city(city)
        return [d for d in self._forecast(city) if matches_any(d.weather_description, SUNNY_KEYWORDS)]

    def cloudy_days(self, city: str) -> List[ForecastDay]:
        require_city(city)
        return [d for d in self._forecast(city) if matches_any(d.weather_description, CLOUDY_KEYWORDS)]

    def temperature_trend(self, city: str, threshold: float) -> str:
        """
        Trend of the daily average temperature over the forecast.

        Args:
            city: City name.
            threshold: Degrees below which a day-to-day change is ignored.

        Returns:
            TREND_RISING, TREND_FALLING, TREND_STABLE or NO_DATA_TREND.
        """
        require_city(city)
        if threshold < 0:
            raise InvalidArgumentError("Threshold cannot be negative", param_name="threshold")

        forecast = self._forecast(city)
        if not forecast:
            return NO_DATA_TREND

        return classify_trend([daily_average(d) for d in forecast], threshold)

    # =========================================================================
    # Rankings and filters
    # =========================================================================

    def _top_n(self, city: str, n: int, key, descending: bool) -> List[ForecastDay]:
        require_city(city)
        if n < 1:
            raise InvalidArgumentError("n must be at least 1", param_name="n")

        forecast = self._forecast(city)
        if not forecast:
            logger.warning(f"Top-N requested for city without forecast: {city}")
            raise NoForecastDataError(f"No forecast found for city '{city}'")

        n = min(n, len(forecast))
        # sorted() keeps feed order among equal temperatures, reverse included
        return sorted(forecast, key=key, reverse=descending)[:n]

    def top_n_by_max_temperature(self, city: str, n: int) -> List[ForecastDay]:
        """The n days with the highest maximum, hottest first."""
        return self._top_n(city, n, key=lambda d: d.temperature_max, descending=True)

    def top_n_by_min_temperature(self, city: str, n: int) -> List[ForecastDay]:
        """The n days with the lowest minimum, coldest first."""
        return self._top_n(city, n, key=lambda d: d.temperature_min, descending=False)

    def days_in_temperature_range(self, city: str, min_temp: float, max_temp: float) -> List[ForecastDay]:
        """Days lying entirely inside [min_temp, max_temp]."""
        require_city(city)
        if min_temp > max_temp:
            raise InvalidArgumentError("min_temp cannot be greater than max_temp", param_name="min_temp")

        return [
            d for d in self._forecast(city)
            if d.temperature_min >= min_temp and d.temperature_max <= max_temp
        ]
