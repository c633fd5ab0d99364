"""REST API views for city search and city weather."""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from planner.entities import CityRecord, CityWeather, DailyForecast, WeatherSnapshot
from planner.errors import ErrorCode, PlannerError
from planner.services.planner import PlannerService, build_planner_service

ERROR_STATUS = {
    ErrorCode.BAD_USER_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_COORDINATES: status.HTTP_400_BAD_REQUEST,
    ErrorCode.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorCode.UNKNOWN_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@lru_cache(maxsize=1)
def get_planner_service() -> PlannerService:
    return build_planner_service(
        geocoding_url=settings.PLANNER_GEOCODING_URL,
        forecast_url=settings.PLANNER_FORECAST_URL,
        timeout=settings.PLANNER_REQUEST_TIMEOUT,
        activities_per_day=settings.PLANNER_ACTIVITIES_PER_DAY,
    )


def serialize_city(city: CityRecord) -> Dict[str, Any]:
    return {
        "id": city.id,
        "name": city.name,
        "country": city.country,
        "latitude": city.latitude,
        "longitude": city.longitude,
    }


def _serialize_day(day: DailyForecast) -> Dict[str, Any]:
    return {
        "date": day.date,
        "maxTemp": day.max_temp,
        "minTemp": day.min_temp,
        "conditions": day.conditions,
        "precipitation": day.precipitation,
        "windSpeed": day.wind_speed,
        "activities": [
            {
                "name": activity.name,
                "suitabilityScore": activity.suitability_score,
                "reasoning": activity.reasoning,
            }
            for activity in day.activities
        ],
    }


def _serialize_weather(weather: WeatherSnapshot) -> Dict[str, Any]:
    return {
        "temperature": weather.temperature,
        "conditions": weather.conditions,
        "humidity": weather.humidity,
        "windSpeed": weather.wind_speed,
        "precipitation": weather.precipitation,
        "forecast": [_serialize_day(day) for day in weather.forecast],
    }


def serialize_city_weather(result: CityWeather) -> Dict[str, Any]:
    return {"city": serialize_city(result.city), "weather": _serialize_weather(result.weather)}


def serialize_error(error: PlannerError) -> Dict[str, List[Dict[str, Any]]]:
    extensions: Dict[str, Any] = {"code": error.code}
    if error.code != ErrorCode.INTERNAL_SERVER_ERROR and error.service:
        extensions["service"] = error.service
    return {"errors": [{"message": error.message, "extensions": extensions}]}


def _error_response(error: PlannerError) -> Response:
    return Response(
        serialize_error(error),
        status=ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


class CitySearchView(APIView):
    """Search populated places by (partial) name."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the cities matching the ``input`` query parameter."""
        try:
            cities = get_planner_service().search_cities(request.query_params.get("input", ""))
        except PlannerError as exc:
            return _error_response(exc)
        return Response([serialize_city(city) for city in cities], status=status.HTTP_200_OK)


class CityWeatherView(APIView):
    """Current weather and ranked activities for a city id."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather for the ``cityId`` query parameter."""
        city_id = request.query_params.get("cityId")
        if not city_id:
            return Response(
                {
                    "errors": [
                        {
                            "message": "cityId query parameter is required",
                            "extensions": {"code": ErrorCode.BAD_USER_INPUT},
                        }
                    ]
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            result = get_planner_service().get_city_weather(city_id)
        except PlannerError as exc:
            return _error_response(exc)
        return Response(serialize_city_weather(result), status=status.HTTP_200_OK)
