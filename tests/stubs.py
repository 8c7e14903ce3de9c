"""Stub collaborators so no test touches the network."""

from romanian_weather.normalizer import ForecastDay


class StubFetcher:
    """Stands in for MeteoFetcher, serving local fixture payloads."""

    def __init__(self, today: bytes = b"", forecast: bytes = b""):
        self.today = today
        self.forecast = forecast
        self.calls = []
        self.closed = False

    def fetch_today(self) -> bytes:
        self.calls.append("today")
        return self.today

    def fetch_forecast(self) -> bytes:
        self.calls.append("forecast")
        return self.forecast

    def close(self) -> None:
        self.closed = True


class StubForecastSource:
    """Serves fixed forecast days per city, case-insensitively."""

    def __init__(self, forecasts=None):
        self.forecasts = {k.lower(): v for k, v in (forecasts or {}).items()}
        self.requested = []

    def get_5day_forecast(self, city):
        self.requested.append(city)
        return list(self.forecasts.get(city.lower(), []))


def day(date, t_min, t_max, description=""):
    return ForecastDay(
        date=date,
        temperature_min=t_min,
        temperature_max=t_max,
        weather_description=description
    )
