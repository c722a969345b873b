"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from shoresquad.api.serializers import serialize_weather
from shoresquad.api.views import get_services


class Command(BaseCommand):
    help = "Fetch current conditions and the four day forecast"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Exit with an error instead of printing the fallback bundle",
        )

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        result = get_services().weather.fetch()
        if options.get("strict") and not result.is_live:
            raise CommandError(f"Live weather unavailable: {result.fallback_reason}")
        self.stdout.write(json.dumps(serialize_weather(result), ensure_ascii=False))
