from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ..entities import CityRecord, CityWeather
from ..errors import InternalError, PlannerError
from ..observers import LoggingObserver, OperationObserver
from ..providers.base import RequestConfig
from ..providers.forecast import ForecastProvider
from ..providers.geocoding import GeocodingProvider

T = TypeVar("T")

SEARCH_CITIES = "searchCities"
GET_CITY_WEATHER = "getCityWeather"


class PlannerService:
    """Sequence the Open-Meteo providers and normalize their failures.

    Errors leaving this service are always :class:`PlannerError` instances:
    typed provider errors pass through with their code and the originating
    service attached, anything else becomes an :class:`InternalError`.
    """

    def __init__(
        self,
        *,
        geocoder: GeocodingProvider,
        forecaster: ForecastProvider,
        observer: Optional[OperationObserver] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.geocoder = geocoder
        self.forecaster = forecaster
        self.observer = observer or LoggingObserver()
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def search_cities(self, query: Optional[str]) -> List[CityRecord]:
        self.observer.started(SEARCH_CITIES, input=query)
        cities = self._call(
            SEARCH_CITIES,
            lambda: self.geocoder.search_cities(query),
            service=self.geocoder.service,
            fallback_message="Failed to search cities",
            context={"input": query},
        )
        self.observer.succeeded(SEARCH_CITIES, input=query, count=len(cities))
        return cities

    def get_city_weather(self, city_id: str) -> CityWeather:
        self.observer.started(GET_CITY_WEATHER, city_id=city_id)
        weather, info = self._call(
            GET_CITY_WEATHER,
            lambda: self.forecaster.get_weather_by_city_id(city_id),
            service=self.forecaster.service,
            fallback_message="Failed to get weather data",
            context={"city_id": city_id},
        )
        city = CityRecord(
            id=city_id,
            name=info.name,
            country=info.country,
            latitude=info.latitude,
            longitude=info.longitude,
        )
        self.observer.succeeded(GET_CITY_WEATHER, city_id=city_id, city=f"{city.name}, {city.country}")
        return CityWeather(city=city, weather=weather)

    # Helpers ------------------------------------------------------------
    def _call(
        self,
        operation: str,
        func: Callable[[], T],
        *,
        service: str,
        fallback_message: str,
        context: Dict[str, Any],
    ) -> T:
        try:
            return func()
        except PlannerError as exc:
            exc.with_service(service)
            self.observer.failed(operation, exc, **context)
            raise
        except Exception as exc:  # noqa: BLE001 - everything else is an internal error
            self._log.exception("Unexpected error during %s", operation)
            error = InternalError(fallback_message)
            self.observer.failed(operation, error, **context)
            raise error from exc


def build_planner_service(
    *,
    geocoding_url: Optional[str] = None,
    forecast_url: Optional[str] = None,
    timeout: float = 10.0,
    activities_per_day: int = 1,
    observer: Optional[OperationObserver] = None,
) -> PlannerService:
    request_config = RequestConfig(timeout=timeout)
    return PlannerService(
        geocoder=GeocodingProvider(base_url=geocoding_url, request_config=request_config),
        forecaster=ForecastProvider(
            base_url=forecast_url,
            activities_per_day=activities_per_day,
            request_config=request_config,
        ),
        observer=observer,
    )


__all__ = ["PlannerService", "build_planner_service", "SEARCH_CITIES", "GET_CITY_WEATHER"]
