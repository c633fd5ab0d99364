from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CityInfo:
    """City fields recovered from a city id."""

    name: str
    country: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class CityRecord:
    """Normalized city search result.

    ``id`` is the rich city identifier, see :mod:`planner.city_id`.
    """

    id: str
    name: str
    country: str
    latitude: float
    longitude: float

    @classmethod
    def from_coordinates(cls, latitude: float, longitude: float, name: str, country: str) -> "CityRecord":
        from .city_id import encode

        return cls(
            id=encode(latitude, longitude, name, country),
            name=name,
            country=country,
            latitude=latitude,
            longitude=longitude,
        )


@dataclass(frozen=True)
class ActivityProfile:
    """Ideal conditions for an activity.

    - rain_tolerance: 0 = hates rain, 1 = loves rain
    - wind_preference: 0 = hates wind, 1 = loves wind
    """

    name: str
    ideal_temp_min: float
    ideal_temp_max: float
    rain_tolerance: float
    wind_preference: float


@dataclass(frozen=True)
class DailyForecastSummary:
    """One forecast day.

    Values are stored in the provider units:
    - temperature in Celsius
    - precipitation in millimetres (mm)
    - wind speed in kilometres per hour (km/h)
    """

    date: str
    max_temp: float
    min_temp: float
    conditions: str
    precipitation: float
    wind_speed: float


@dataclass(frozen=True)
class ScoredActivity:
    name: str
    suitability_score: int
    reasoning: str


@dataclass(frozen=True)
class DailyForecast(DailyForecastSummary):
    activities: Tuple[ScoredActivity, ...] = ()


@dataclass(frozen=True)
class WeatherSnapshot:
    temperature: float
    conditions: str
    humidity: float
    wind_speed: float
    precipitation: float
    forecast: Tuple[DailyForecast, ...] = ()


@dataclass(frozen=True)
class CityWeather:
    city: CityRecord
    weather: WeatherSnapshot


__all__ = [
    "CityInfo",
    "CityRecord",
    "ActivityProfile",
    "DailyForecastSummary",
    "ScoredActivity",
    "DailyForecast",
    "WeatherSnapshot",
    "CityWeather",
]
