from pathlib import Path

import pytest

from romanian_weather.analysis import WeatherAnalysisService
from romanian_weather.service import WeatherService
from tests.stubs import StubFetcher

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def today_json() -> bytes:
    return (DATA_DIR / "starea_vremii.json").read_bytes()


@pytest.fixture
def forecast_xml() -> bytes:
    return (DATA_DIR / "prognoza_orase.xml").read_bytes()


@pytest.fixture
def stub_fetcher(today_json, forecast_xml) -> StubFetcher:
    return StubFetcher(today=today_json, forecast=forecast_xml)


@pytest.fixture
def weather_service(stub_fetcher) -> WeatherService:
    return WeatherService(fetcher=stub_fetcher)


@pytest.fixture
def analysis(weather_service) -> WeatherAnalysisService:
    return WeatherAnalysisService(weather_service)
