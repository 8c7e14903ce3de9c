import pytest

from romanian_weather.analysis import InvalidArgumentError
from romanian_weather.normalizer import MalformedPayloadError
from romanian_weather.service import WeatherService
from tests.stubs import StubFetcher


def test_today_weather_boundaries(weather_service):
    snapshots = weather_service.get_today_weather()

    assert len(snapshots) == 5
    assert min(s.temperature for s in snapshots) == pytest.approx(0.0)
    assert max(s.temperature for s in snapshots) == pytest.approx(9.9)
    assert max(s.humidity for s in snapshots) == 70


def test_weather_by_city_is_case_insensitive(weather_service):
    assert weather_service.get_weather_by_city("iasi").temperature == pytest.approx(3.5)
    assert weather_service.get_weather_by_city("IaSi") == weather_service.get_weather_by_city("IASI")


def test_weather_by_city_returns_first_match(weather_service):
    snapshot = weather_service.get_weather_by_city("bucuresti")

    assert snapshot.city == "BUCURESTI"
    assert snapshot.temperature == pytest.approx(5.0)


def test_weather_by_unknown_city(weather_service):
    assert weather_service.get_weather_by_city("Atlantis") is None


def test_every_call_refetches(weather_service, stub_fetcher):
    weather_service.get_today_weather()
    weather_service.get_weather_by_city("Iasi")
    weather_service.get_5day_forecast("Iasi")
    weather_service.get_5day_forecast("Iasi")

    assert stub_fetcher.calls == ["today", "today", "forecast", "forecast"]


def test_5day_forecast(weather_service):
    forecast = weather_service.get_5day_forecast("Iasi")

    assert len(forecast) == 5
    assert min(d.temperature_min for d in forecast) == pytest.approx(-2.0)
    assert max(d.temperature_max for d in forecast) == pytest.approx(12.0)


@pytest.mark.parametrize("city", ["", "   ", None])
def test_5day_forecast_rejects_empty_city(weather_service, stub_fetcher, city):
    with pytest.raises(InvalidArgumentError, match="City cannot be null or empty") as exc_info:
        weather_service.get_5day_forecast(city)

    assert exc_info.value.param_name == "city"
    assert stub_fetcher.calls == []


def test_5day_forecast_unknown_city_is_empty(weather_service):
    assert weather_service.get_5day_forecast("Atlantis") == []


def test_malformed_payloads_propagate():
    service = WeatherService(fetcher=StubFetcher(today=b"{oops", forecast=b"<oops"))

    with pytest.raises(MalformedPayloadError):
        service.get_today_weather()
    with pytest.raises(MalformedPayloadError):
        service.get_5day_forecast("Iasi")


def test_close_closes_fetcher(weather_service, stub_fetcher):
    weather_service.close()
    assert stub_fetcher.closed


@pytest.mark.parametrize("city", ["", "   ", None])
def test_weather_by_city_rejects_empty_city(weather_service, stub_fetcher, city):
    with pytest.raises(InvalidArgumentError, match="City cannot be null or empty"):
        weather_service.get_weather_by_city(city)

    assert stub_fetcher.calls == []
