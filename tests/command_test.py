from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from backend.api.views import get_planner_service

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


@pytest.fixture(autouse=True)
def _fresh_service():
    get_planner_service.cache_clear()
    yield
    get_planner_service.cache_clear()


def test_command_searches_cities(requests_mock, geocoding_payload):
    requests_mock.get(GEOCODING_URL, json=geocoding_payload)
    out = StringIO()

    call_command("city_weather", search="London", stdout=out)

    payload = json.loads(out.getvalue())
    assert [city["country"] for city in payload] == ["United Kingdom", "Canada"]


def test_command_fetches_city_weather(requests_mock, forecast_payload):
    requests_mock.get(FORECAST_URL, json=forecast_payload)
    out = StringIO()

    call_command("city_weather", city_id="51.5074,-0.1278:London:United Kingdom", stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["city"]["name"] == "London"
    assert len(payload["weather"]["forecast"]) == 2
    assert payload["weather"]["forecast"][0]["activities"][0]["suitabilityScore"] == 90


def test_command_reports_error_code(requests_mock):
    with pytest.raises(CommandError, match="INVALID_COORDINATES"):
        call_command("city_weather", city_id="999,999:Atlantis:Ocean")

    assert requests_mock.call_count == 0


def test_command_reports_upstream_failure(requests_mock):
    requests_mock.get(GEOCODING_URL, status_code=429)

    with pytest.raises(CommandError, match="RATE_LIMIT_EXCEEDED"):
        call_command("city_weather", search="London")
