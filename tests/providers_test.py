from __future__ import annotations

import pytest
import requests

from planner.entities import CityInfo, CityRecord
from planner.errors import (
    ErrorCode,
    InvalidCityIdFormat,
    InvalidCoordinates,
    InvalidQuery,
    ProviderError,
    ProviderTimeout,
    QuotaExceeded,
)
from planner.providers.forecast import ForecastProvider
from planner.providers.geocoding import GeocodingProvider

GEOCODING_URL = "https://geocoding.test/v1/search"
FORECAST_URL = "https://forecast.test/v1/forecast"


@pytest.fixture
def geocoder() -> GeocodingProvider:
    return GeocodingProvider(base_url="https://geocoding.test/v1")


@pytest.fixture
def forecaster() -> ForecastProvider:
    return ForecastProvider(base_url="https://forecast.test/v1/")


def test_search_returns_populated_places_with_rich_ids(requests_mock, geocoder, geocoding_payload):
    requests_mock.get(GEOCODING_URL, json=geocoding_payload)

    cities = geocoder.search_cities("London")

    assert cities == [
        CityRecord(
            id="51.5074,-0.1278:London:United Kingdom",
            name="London",
            country="United Kingdom",
            latitude=51.5074,
            longitude=-0.1278,
        ),
        CityRecord(
            id="42.98339,-81.23304:London:Canada",
            name="London",
            country="Canada",
            latitude=42.98339,
            longitude=-81.23304,
        ),
    ]


def test_search_sends_trimmed_query(requests_mock, geocoder):
    requests_mock.get(GEOCODING_URL, json={"results": []})

    geocoder.search_cities("  Cape Town  ")

    query = requests_mock.last_request.qs
    assert query["name"] == ["cape town"]
    assert query["count"] == ["10"]
    assert query["language"] == ["en"]
    assert query["format"] == ["json"]


@pytest.mark.parametrize("query", ["a", "  a  ", "", None])
def test_search_rejects_short_queries_without_calling_upstream(requests_mock, geocoder, query):
    with pytest.raises(InvalidQuery) as excinfo:
        geocoder.search_cities(query)

    assert excinfo.value.code == ErrorCode.BAD_USER_INPUT
    assert requests_mock.call_count == 0


def test_search_without_results_returns_empty_list(requests_mock, geocoder):
    requests_mock.get(GEOCODING_URL, json={"generationtime_ms": 0.4})

    assert geocoder.search_cities("Atlantis") == []


def test_search_rate_limited(requests_mock, geocoder):
    requests_mock.get(GEOCODING_URL, status_code=429, text="too many requests")

    with pytest.raises(QuotaExceeded) as excinfo:
        geocoder.search_cities("London")

    assert excinfo.value.code == ErrorCode.RATE_LIMIT_EXCEEDED
    assert excinfo.value.status_code == 429


def test_search_timeout(requests_mock, geocoder):
    requests_mock.get(GEOCODING_URL, exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(ProviderTimeout) as excinfo:
        geocoder.search_cities("London")

    assert excinfo.value.code == ErrorCode.TIMEOUT


def test_search_server_error(requests_mock, geocoder):
    requests_mock.get(GEOCODING_URL, status_code=500, reason="Internal Server Error", text="boom")

    with pytest.raises(ProviderError) as excinfo:
        geocoder.search_cities("London")

    assert excinfo.value.code == ErrorCode.UNKNOWN_ERROR
    assert excinfo.value.status_code == 500
    assert "Internal Server Error" in excinfo.value.message


def test_search_connection_error(requests_mock, geocoder):
    requests_mock.get(GEOCODING_URL, exc=requests.exceptions.ConnectionError("connection refused"))

    with pytest.raises(ProviderError) as excinfo:
        geocoder.search_cities("London")

    assert type(excinfo.value) is ProviderError
    assert "connection refused" in excinfo.value.message


def test_weather_data_normalization(requests_mock, forecaster, forecast_payload):
    requests_mock.get(FORECAST_URL, json=forecast_payload)

    weather = forecaster.get_weather_data(51.5074, -0.1278)

    assert weather.temperature == 20.0
    assert weather.conditions == "Clear sky"
    assert weather.humidity == 65
    assert weather.wind_speed == 10.0
    assert weather.precipitation == 0.0
    assert [day.date for day in weather.forecast] == ["2024-06-01", "2024-06-02"]

    first, second = weather.forecast
    assert (first.max_temp, first.min_temp, first.conditions) == (22.0, 18.0, "Mainly clear")
    assert [a.name for a in first.activities] == ["outdoor_sightseeing"]
    assert first.activities[0].suitability_score == 90
    assert second.conditions == "Slight rain"
    assert [a.name for a in second.activities] == ["indoor_sightseeing"]


def test_weather_request_parameters(requests_mock, forecaster, forecast_payload):
    requests_mock.get(FORECAST_URL, json=forecast_payload)

    forecaster.get_weather_data(51.5074, -0.1278)

    query = requests_mock.last_request.qs
    assert query["latitude"] == ["51.5074"]
    assert query["longitude"] == ["-0.1278"]
    assert query["current"] == ["temperature_2m,relative_humidity_2m,precipitation,weather_code,wind_speed_10m"]
    assert query["daily"] == ["weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum,wind_speed_10m_max"]
    assert query["timezone"] == ["auto"]
    assert query["forecast_days"] == ["7"]


def test_weather_activities_per_day(requests_mock, forecast_payload):
    forecaster = ForecastProvider(base_url="https://forecast.test/v1", activities_per_day=4)
    requests_mock.get(FORECAST_URL, json=forecast_payload)

    weather = forecaster.get_weather_data(51.5074, -0.1278)

    assert all(len(day.activities) == 4 for day in weather.forecast)


@pytest.mark.parametrize("latitude, longitude", [(91, 0), (0, 181), (float("nan"), 0)])
def test_weather_rejects_invalid_coordinates_without_calling_upstream(requests_mock, forecaster, latitude, longitude):
    with pytest.raises(InvalidCoordinates):
        forecaster.get_weather_data(latitude, longitude)

    assert requests_mock.call_count == 0


def test_weather_missing_daily_block(requests_mock, forecaster, forecast_payload):
    del forecast_payload["daily"]
    requests_mock.get(FORECAST_URL, json=forecast_payload)

    with pytest.raises(ProviderError) as excinfo:
        forecaster.get_weather_data(51.5074, -0.1278)

    assert excinfo.value.code == ErrorCode.UNKNOWN_ERROR


def test_weather_short_daily_series(requests_mock, forecaster, forecast_payload):
    forecast_payload["daily"]["precipitation_sum"] = [0.0]
    requests_mock.get(FORECAST_URL, json=forecast_payload)

    with pytest.raises(ProviderError):
        forecaster.get_weather_data(51.5074, -0.1278)


def test_weather_rate_limited(requests_mock, forecaster):
    requests_mock.get(FORECAST_URL, status_code=429)

    with pytest.raises(QuotaExceeded):
        forecaster.get_weather_data(51.5074, -0.1278)


def test_weather_by_city_id(requests_mock, forecaster, forecast_payload):
    requests_mock.get(FORECAST_URL, json=forecast_payload)

    weather, city = forecaster.get_weather_by_city_id("51.5074,-0.1278:London:United Kingdom")

    assert city == CityInfo(name="London", country="United Kingdom", latitude=51.5074, longitude=-0.1278)
    assert weather.temperature == 20.0
    assert len(weather.forecast) == 2
    assert requests_mock.call_count == 1


def test_weather_by_invalid_city_id(requests_mock, forecaster):
    with pytest.raises(InvalidCityIdFormat, match="Invalid city ID format"):
        forecaster.get_weather_by_city_id("invalid-format")

    assert requests_mock.call_count == 0
