from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest

from planner.errors import PlannerError


class RecordingObserver:
    def __init__(self) -> None:
        self.events: List[Tuple[str, str, Dict[str, Any]]] = []

    def started(self, operation: str, **context: Any) -> None:
        self.events.append(("started", operation, context))

    def succeeded(self, operation: str, **context: Any) -> None:
        self.events.append(("succeeded", operation, context))

    def failed(self, operation: str, error: PlannerError, **context: Any) -> None:
        self.events.append(("failed", operation, dict(context, code=error.code)))


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def forecast_payload() -> Dict[str, Any]:
    return {
        "current": {
            "time": "2024-06-01T12:00",
            "temperature_2m": 20.0,
            "relative_humidity_2m": 65,
            "precipitation": 0.0,
            "weather_code": 0,
            "wind_speed_10m": 10.0,
        },
        "daily": {
            "time": ["2024-06-01", "2024-06-02"],
            "weather_code": [1, 61],
            "temperature_2m_max": [22.0, 18.0],
            "temperature_2m_min": [18.0, 15.0],
            "precipitation_sum": [0.0, 15.0],
            "wind_speed_10m_max": [5.0, 10.0],
        },
    }


@pytest.fixture
def geocoding_payload() -> Dict[str, Any]:
    return {
        "results": [
            {
                "id": 2643743,
                "name": "London",
                "latitude": 51.5074,
                "longitude": -0.1278,
                "feature_code": "PPLC",
                "country_code": "GB",
                "country": "United Kingdom",
            },
            {
                "id": 2643741,
                "name": "City of London",
                "latitude": 51.51279,
                "longitude": -0.09184,
                "feature_code": "ADM2",
                "country_code": "GB",
                "country": "United Kingdom",
            },
            {
                "id": 6058560,
                "name": "London",
                "latitude": 42.98339,
                "longitude": -81.23304,
                "feature_code": "PPL",
                "country_code": "CA",
                "country": "Canada",
            },
        ],
        "generationtime_ms": 0.7,
    }
