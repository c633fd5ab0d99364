"""Rich city identifiers.

A city id is a self-describing token ``"<lat>,<lon>:<name>:<country>"``, for
example ``"51.5074,-0.1278:London:United Kingdom"``.  There is no database
behind it: decoding the id is the only way a city is looked up again.

Names and countries are inserted verbatim.  A colon inside either of them
makes the id undecodable; no escaping is applied.
"""
from __future__ import annotations

import math
from typing import Any

from .entities import CityInfo
from .errors import InvalidCityIdFormat, InvalidCoordinates


def encode(latitude: float, longitude: float, name: str, country: str) -> str:
    return f"{_format_coordinate(latitude)},{_format_coordinate(longitude)}:{name}:{country}"


def decode(city_id: str) -> CityInfo:
    parts = city_id.split(":")
    if len(parts) != 3:
        raise InvalidCityIdFormat('Invalid city ID format. Expected format: "lat,lon:name:country"')
    coords, name, country = parts

    coordinate_parts = coords.split(",")
    if len(coordinate_parts) != 2 or not all(coordinate_parts):
        raise InvalidCityIdFormat('Invalid coordinates in city ID. Expected format: "lat,lon"')
    lat_str, lon_str = coordinate_parts

    try:
        latitude = float(lat_str)
        longitude = float(lon_str)
    except ValueError as exc:
        raise InvalidCoordinates(
            'Invalid coordinates in city ID. Expected valid coordinates in the format: "lat,lon"'
        ) from exc
    if not validate_coordinate(latitude, longitude):
        raise InvalidCoordinates(
            'Invalid coordinates in city ID. Expected valid coordinates in the format: "lat,lon"'
        )
    return CityInfo(name=name, country=country, latitude=latitude, longitude=longitude)


def validate_coordinate(latitude: Any, longitude: Any) -> bool:
    """Return True for a finite latitude/longitude pair inside WGS84 bounds."""
    for value in (latitude, longitude):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0


def _format_coordinate(value: float) -> str:
    # integral values print as "10", not "10.0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = ["encode", "decode", "validate_coordinate"]
