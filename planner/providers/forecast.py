from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from .base import OpenMeteoProvider
from ..activities import ActivityRanker
from ..city_id import decode, validate_coordinate
from ..conditions import code_to_condition
from ..entities import CityInfo, DailyForecast, DailyForecastSummary, WeatherSnapshot
from ..errors import InvalidCoordinates, ProviderError

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation",
    "weather_code",
    "wind_speed_10m",
)
DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "wind_speed_10m_max",
)
FORECAST_DAYS = 7


class ForecastProvider(OpenMeteoProvider):
    base_url = "https://api.open-meteo.com/v1"
    service = "OpenMeteo Weather API"

    def __init__(
        self,
        base_url: Optional[str] = None,
        ranker: Optional[ActivityRanker] = None,
        activities_per_day: int = 1,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.base_url = (base_url or self.base_url).rstrip("/")
        self.ranker = ranker or ActivityRanker()
        self.activities_per_day = activities_per_day
        self._log = logging.getLogger(self.__class__.__name__)

    def get_weather_data(self, latitude: float, longitude: float) -> WeatherSnapshot:
        """Return current conditions and a 7 day forecast with ranked activities."""
        if not validate_coordinate(latitude, longitude):
            raise InvalidCoordinates("Invalid coordinates provided", service=self.service)

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "auto",
            "forecast_days": FORECAST_DAYS,
        }
        action = "fetching weather data"
        response = self._request("GET", f"{self.base_url}/forecast", action=action, params=params)
        data = self._json(response, action) or {}
        current = data.get("current")
        daily = data.get("daily")
        if not current or not daily:
            raise ProviderError(f"Missing current or daily data while {action}", service=self.service)

        try:
            forecast = self._build_forecast(daily)
            return WeatherSnapshot(
                temperature=current["temperature_2m"],
                conditions=code_to_condition(current["weather_code"]),
                humidity=current["relative_humidity_2m"],
                wind_speed=current["wind_speed_10m"],
                precipitation=current["precipitation"],
                forecast=tuple(forecast),
            )
        except (KeyError, IndexError, TypeError) as exc:
            self._log.error("Malformed forecast payload", exc_info=exc)
            raise ProviderError(f"Malformed payload received while {action}", service=self.service) from exc

    def get_weather_by_city_id(self, city_id: str) -> Tuple[WeatherSnapshot, CityInfo]:
        city = decode(city_id)
        weather = self.get_weather_data(city.latitude, city.longitude)
        return weather, city

    # helpers ------------------------------------------------------------
    def _build_forecast(self, daily: Dict[str, Any]) -> List[DailyForecast]:
        result: List[DailyForecast] = []
        for idx, date_str in enumerate(daily["time"]):
            summary = DailyForecastSummary(
                date=date_str,
                max_temp=daily["temperature_2m_max"][idx],
                min_temp=daily["temperature_2m_min"][idx],
                conditions=code_to_condition(daily["weather_code"][idx]),
                precipitation=daily["precipitation_sum"][idx],
                wind_speed=daily["wind_speed_10m_max"][idx],
            )
            activities = self.ranker.rank(summary, top=self.activities_per_day)
            result.append(
                DailyForecast(
                    date=summary.date,
                    max_temp=summary.max_temp,
                    min_temp=summary.min_temp,
                    conditions=summary.conditions,
                    precipitation=summary.precipitation,
                    wind_speed=summary.wind_speed,
                    activities=tuple(activities),
                )
            )
        return result


__all__ = ["ForecastProvider", "FORECAST_DAYS"]
