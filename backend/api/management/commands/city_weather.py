"""Management command to search cities or fetch city weather using the API stack."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_planner_service, serialize_city, serialize_city_weather
from planner.errors import PlannerError


class Command(BaseCommand):
    help = "Search cities by name or fetch the weather and suggested activities for a city id"

    def add_arguments(self, parser) -> None:  # noqa: D401
        group = parser.add_mutually_exclusive_group(required=True)
        group.add_argument("--search", type=str, help="City name, at least 2 characters")
        group.add_argument("--city-id", type=str, help='Rich city id, e.g. "51.5074,-0.1278:London:United Kingdom"')

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        service = get_planner_service()
        try:
            if options.get("search") is not None:
                payload: Any = [serialize_city(city) for city in service.search_cities(options["search"])]
            else:
                payload = serialize_city_weather(service.get_city_weather(options["city_id"]))
        except PlannerError as exc:
            raise CommandError(f"{exc.code}: {exc.message}") from exc

        self.stdout.write(json.dumps(payload))
