"""
Format normalizer module for the Romanian Weather package.

Decodes the raw ANM payloads into canonical records:
- JSON "today" feed -> WeatherSnapshot (one per station city)
- XML forecast feed -> ForecastDay (up to FORECAST_DAYS per city)

Upstream fields are loosely typed (numbers sometimes arrive as strings,
fields go missing), so every field decode falls back to a documented
default instead of failing. Only a document that cannot be parsed at all
raises MalformedPayloadError.
"""

import json
import logging
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .config import FORECAST_DAYS

logger = logging.getLogger(__name__)

Payload = Union[bytes, str]

UNKNOWN_CITY = "Unknown"
UNAVAILABLE_DESCRIPTION = "indisponibil"

# "Today" feed property names
PROP_CITY = "nume"
PROP_TEMPERATURE = "tempe"
PROP_HUMIDITY = "umezeala"
PROP_DESCRIPTION = "nebulozitate"


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions for one city."""
    city: str
    temperature: float          # Celsius
    humidity: int               # percentage, not range-checked
    weather_description: str


@dataclass(frozen=True)
class ForecastDay:
    """One day of a city's forecast. temperature_min <= temperature_max is not enforced."""
    date: str                   # YYYY-MM-DD, kept as the feed's label
    temperature_min: float
    temperature_max: float
    weather_description: str    # Romanian phrase, e.g. "CER SENIN"


class MalformedPayloadError(ValueError):
    """Raised when a feed document cannot be parsed at all."""
    pass


class JsonKind(Enum):
    """Kind of a decoded JSON value, as far as numeric decoding cares."""
    NUMBER = "number"
    STRING = "string"
    OTHER = "other"


def json_kind(value: Any) -> JsonKind:
    """Classify a decoded JSON value. Booleans and null are OTHER."""
    if isinstance(value, bool) or value is None:
        return JsonKind.OTHER
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    return JsonKind.OTHER


def city_key(city: str) -> str:
    """Canonical lookup key for a city name."""
    return city.casefold()


# =============================================================================
# Tolerant field decoding
# =============================================================================

def _parse_float(text: Optional[str], default: Optional[float] = 0.0) -> Optional[float]:
    # reject digit separators such as "1_5"
    if text is None or "_" in text:
        return default
    try:
        value = float(text.strip())
    except ValueError:
        return default
    return value if math.isfinite(value) else default


def _parse_int(text: Optional[str], default: Optional[int] = 0) -> Optional[int]:
    if text is None or "_" in text:
        return default
    try:
        return int(text.strip())
    except ValueError:
        return default


def decode_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Decode a number-or-numeric-string JSON value as a float."""
    kind = json_kind(value)
    if kind is JsonKind.NUMBER:
        try:
            value = float(value)
        except OverflowError:
            return default
        return value if math.isfinite(value) else default
    if kind is JsonKind.STRING:
        return _parse_float(value, default)
    return default


def decode_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """
    Decode a number-or-numeric-string JSON value as an int.

    Non-integral numbers count as a failed decode, same as "65.5" as a string.
    """
    kind = json_kind(value)
    if kind is JsonKind.NUMBER:
        if isinstance(value, int):
            return value
        return int(value) if math.isfinite(value) and value.is_integer() else default
    if kind is JsonKind.STRING:
        return _parse_int(value, default)
    return default


def _decode_text(value: Any, default: str) -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


# =============================================================================
# JSON "today" feed
# =============================================================================

def _load_features(raw_json: Payload) -> List[Any]:
    try:
        document = json.loads(raw_json)
    except ValueError as e:
        logger.error(f"Today feed is not valid JSON: {e}")
        raise MalformedPayloadError(f"JSON parsing failed: {e}")

    if not isinstance(document, dict) or not isinstance(document.get("features"), list):
        logger.error("Today feed has no 'features' list")
        raise MalformedPayloadError("JSON document has no 'features' list")

    return document["features"]


def _decode_snapshot(properties: Dict[str, Any]) -> WeatherSnapshot:
    city = _decode_text(properties.get(PROP_CITY), UNKNOWN_CITY)
    if properties.get(PROP_CITY) is None:
        logger.debug(f"Feature without city name, using {UNKNOWN_CITY!r}")

    temperature = decode_float(properties.get(PROP_TEMPERATURE), default=None)
    if temperature is None:
        logger.debug(f"No usable temperature for {city}: {properties.get(PROP_TEMPERATURE)!r}, defaulting to 0")
        temperature = 0.0

    humidity = decode_int(properties.get(PROP_HUMIDITY), default=None)
    if humidity is None:
        logger.debug(f"No usable humidity for {city}: {properties.get(PROP_HUMIDITY)!r}, defaulting to 0")
        humidity = 0

    description = _decode_text(properties.get(PROP_DESCRIPTION), UNAVAILABLE_DESCRIPTION)
    if properties.get(PROP_DESCRIPTION) is None:
        logger.debug(f"No description for {city}, using {UNAVAILABLE_DESCRIPTION!r}")

    return WeatherSnapshot(
        city=city,
        temperature=temperature,
        humidity=humidity,
        weather_description=description
    )


def decode_snapshots(raw_json: Payload) -> List[WeatherSnapshot]:
    """
    Decode the "today" JSON feed.

    Args:
        raw_json: Feed body, a document with a ``features`` list whose
            entries hold a ``properties`` object.

    Returns:
        One WeatherSnapshot per feature, in feed order. Repeated cities are
        kept as-is.

    Raises:
        MalformedPayloadError: The document is not JSON or has no feature list.
    """
    snapshots = []

    for feature in _load_features(raw_json):
        if not isinstance(feature, dict):
            raise MalformedPayloadError(f"Feature entry is not an object: {feature!r}")

        properties = feature.get("properties")
        if not isinstance(properties, dict):
            properties = {}

        snapshots.append(_decode_snapshot(properties))

    logger.debug(f"Decoded {len(snapshots)} snapshots from today feed")
    return snapshots


# =============================================================================
# XML forecast feed
# =============================================================================

def _parse_forecast_root(raw_xml: Payload) -> ET.Element:
    try:
        return ET.fromstring(raw_xml)
    except ET.ParseError as e:
        logger.error(f"XML parsing error: {e}")
        raise MalformedPayloadError(f"XML parsing failed: {e}")


def _decode_day_temperature(prognoza: ET.Element, tag: str) -> float:
    text = prognoza.findtext(tag)
    value = _parse_float(text, default=None)
    if value is None:
        logger.debug(f"No usable {tag} for {prognoza.get('data', '?')}: {text!r}, defaulting to 0")
        return 0.0
    return value


def _decode_day(prognoza: ET.Element) -> ForecastDay:
    return ForecastDay(
        date=prognoza.get("data", ""),
        temperature_min=_decode_day_temperature(prognoza, "temp_min"),
        temperature_max=_decode_day_temperature(prognoza, "temp_max"),
        weather_description=prognoza.findtext("fenomen_descriere") or ""
    )


def index_forecast(raw_xml: Payload) -> Dict[str, List[ForecastDay]]:
    """
    Decode the whole XML forecast feed into a city-keyed index.

    Keys are ``city_key`` of each ``localitate`` element's ``nume``
    attribute; the first element wins when a name repeats. Only the first
    FORECAST_DAYS ``prognoza`` children of each city are kept.
    """
    root = _parse_forecast_root(raw_xml)
    index: Dict[str, List[ForecastDay]] = {}

    for localitate in root.iterfind(".//localitate"):
        name = localitate.get("nume")
        if name is None:
            continue

        key = city_key(name)
        if key in index:
            logger.debug(f"Duplicate forecast entry for {name}, keeping the first")
            continue

        days = localitate.findall("prognoza")[:FORECAST_DAYS]
        index[key] = [_decode_day(prognoza) for prognoza in days]

    logger.debug(f"Indexed forecasts for {len(index)} cities")
    return index


def decode_forecast(raw_xml: Payload, city: str) -> List[ForecastDay]:
    """
    Decode the forecast days of one city from the XML feed.

    The city name is matched case-insensitively against the whole
    ``nume`` attribute. An unknown city yields an empty list.

    Raises:
        MalformedPayloadError: The document is not well-formed XML.
    """
    return index_forecast(raw_xml).get(city_key(city), [])
