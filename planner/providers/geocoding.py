from __future__ import annotations

import logging
from typing import FrozenSet, List, Optional

from .base import OpenMeteoProvider
from ..entities import CityRecord
from ..errors import InvalidQuery, ProviderError

# GeoNames feature codes of populated places
POPULATED_PLACE_CODES: FrozenSet[str] = frozenset(
    {
        "PPL",
        "PPLA",
        "PPLA2",
        "PPLA3",
        "PPLA4",
        "PPLC",
        "PPLF",
        "PPLG",
        "PPLL",
        "PPLR",
        "PPLS",
        "PPLW",
    }
)

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10


class GeocodingProvider(OpenMeteoProvider):
    base_url = "https://geocoding-api.open-meteo.com/v1"
    service = "OpenMeteo Geocoding API"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = (base_url or self.base_url).rstrip("/")
        self._log = logging.getLogger(self.__class__.__name__)

    def search_cities(self, query: Optional[str]) -> List[CityRecord]:
        """Search populated places whose name matches ``query``."""
        name = (query or "").strip()
        if len(name) < MIN_QUERY_LENGTH:
            raise InvalidQuery(f"Query must be at least {MIN_QUERY_LENGTH} characters long", service=self.service)

        params = {
            "name": name,
            "count": MAX_RESULTS,
            "language": "en",
            "format": "json",
        }
        action = "searching cities"
        response = self._request("GET", f"{self.base_url}/search", action=action, params=params)
        data = self._json(response, action) or {}
        results = data.get("results") or []

        cities: List[CityRecord] = []
        for result in results:
            if result.get("feature_code") not in POPULATED_PLACE_CODES:
                continue
            try:
                city = CityRecord.from_coordinates(
                    result["latitude"],
                    result["longitude"],
                    result["name"],
                    result.get("country") or "",
                )
            except KeyError as exc:
                raise ProviderError(f"Malformed result received while {action}: missing {exc}", service=self.service) from exc
            cities.append(city)
        self._log.debug("Geocoding returned %d results, kept %d", len(results), len(cities))
        return cities


__all__ = ["GeocodingProvider", "POPULATED_PLACE_CODES"]
