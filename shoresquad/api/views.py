"""REST API views exposing the normalized ShoreSquad data."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from django.conf import settings
from django.core.cache import caches
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from shoresquad.api.serializers import (
    parse_new_event,
    serialize_crew,
    serialize_event,
    serialize_event_view,
    serialize_location,
    serialize_snapshot,
    serialize_stats,
    serialize_weather,
)
from shoresquad.core.abstractions import Coordinate, LocationResult
from shoresquad.core.bootstrap import AppBootstrap, annotate_events
from shoresquad.core.config import AppConfig
from shoresquad.core.events import CrewNotFound, EventNotFound, EventRepository, crew_stats
from shoresquad.core.health import FetchRegistry
from shoresquad.core.location import IpGeolocationSource, LocationResolver
from shoresquad.core.providers.base import RequestConfig
from shoresquad.core.providers.datagovsg import DataGovSgProvider
from shoresquad.core.services.weather_service import WeatherService
from shoresquad.core.storage import KeyValueStore, StorageWriteError


@dataclass(frozen=True)
class Services:
    config: AppConfig
    storage: KeyValueStore
    registry: FetchRegistry
    weather: WeatherService
    repository: EventRepository

    def location_resolver(self) -> LocationResolver:
        # One resolver per request: a request stands in for a page load.
        source = None
        if self.config.geolocation_url:
            source = IpGeolocationSource(self.config.geolocation_url)
        return LocationResolver(self.config, self.storage, source=source, registry=self.registry)

    def bootstrap(self) -> AppBootstrap:
        return AppBootstrap(self.location_resolver(), self.weather, self.repository)


@lru_cache(maxsize=1)
def get_services() -> Services:
    config = AppConfig.from_settings(settings)
    storage = KeyValueStore(caches[settings.SHORESQUAD_STORAGE_ALIAS])
    registry = FetchRegistry()
    provider = DataGovSgProvider(
        current_url=config.current_readings_url,
        forecast_url=config.forecast_url,
        wind_speed_url=config.wind_speed_url,
        request_config=RequestConfig(timeout=config.request_timeout),
    )
    return Services(
        config=config,
        storage=storage,
        registry=registry,
        weather=WeatherService(provider, config, registry=registry),
        repository=EventRepository(config, storage),
    )


def _bad_request(detail: str) -> Response:
    return Response({"detail": detail}, status=status.HTTP_400_BAD_REQUEST)


def _not_found(detail: str) -> Response:
    return Response({"detail": detail}, status=status.HTTP_404_NOT_FOUND)


class WeatherView(APIView):
    """Current conditions plus the four day forecast."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        result = get_services().weather.fetch()
        return Response(serialize_weather(result), status=status.HTTP_200_OK)


class LocationView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        result = get_services().location_resolver().resolve()
        return Response(serialize_location(result), status=status.HTTP_200_OK)


class EventListView(APIView):
    """List events for a filter token, or add a new event."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        token = request.query_params.get("filter", "all")
        lat = request.query_params.get("lat")
        lng = request.query_params.get("lng")
        origin = None
        if lat is not None or lng is not None:
            try:
                origin = LocationResult(coordinate=Coordinate(latitude=float(lat), longitude=float(lng)))
            except (TypeError, ValueError):
                return _bad_request("lat and lng must be valid floating point numbers")
        try:
            events = get_services().repository.filter(token)
        except ValueError as exc:
            return _bad_request(str(exc))
        payload = [serialize_event_view(view) for view in annotate_events(events, origin)]
        return Response({"filter": token, "events": payload}, status=status.HTTP_200_OK)

    def post(self, request, *args, **kwargs):  # noqa: D401
        try:
            event = parse_new_event(request.data)
        except ValueError as exc:
            return _bad_request(str(exc))
        try:
            events = get_services().repository.add_event(event)
        except StorageWriteError:
            return Response({"detail": "event could not be saved"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(serialize_event(events[-1]), status=status.HTTP_201_CREATED)


class JoinEventView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, event_id: str, *args, **kwargs):  # noqa: D401
        try:
            event = get_services().repository.join_event(event_id)
        except EventNotFound:
            return _not_found(f"event {event_id} not found")
        return Response(
            {"event": serialize_event(event), "message": "Successfully joined the cleanup event! 🎉"},
            status=status.HTTP_200_OK,
        )


class CrewListView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        crews = get_services().repository.get_crews()
        return Response({"crews": [serialize_crew(crew) for crew in crews]}, status=status.HTTP_200_OK)


class JoinCrewView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, crew_id: str, *args, **kwargs):  # noqa: D401
        try:
            crew = get_services().repository.join_crew(crew_id)
        except CrewNotFound:
            return _not_found(f"crew {crew_id} not found")
        return Response(
            {"crew": serialize_crew(crew), "message": "Welcome to the crew! 👋"},
            status=status.HTTP_200_OK,
        )


class StatsView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        stats = crew_stats(get_services().repository.get_crews())
        return Response(serialize_stats(stats), status=status.HTTP_200_OK)


class BootstrapView(APIView):
    """Everything the page needs on load, in one payload."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        snapshot = get_services().bootstrap().initialize()
        return Response(serialize_snapshot(snapshot), status=status.HTTP_200_OK)


class HealthView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        return Response(get_services().registry.snapshot(), status=status.HTTP_200_OK)


class PreferencesView(APIView):
    """User preferences stored as a single JSON document."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        services = get_services()
        preferences = services.storage.get(services.config.storage_keys.user_preferences, {})
        return Response(preferences, status=status.HTTP_200_OK)

    def put(self, request, *args, **kwargs):  # noqa: D401
        if not isinstance(request.data, dict):
            return _bad_request("preferences must be an object")
        services = get_services()
        if not services.storage.set(services.config.storage_keys.user_preferences, request.data):
            return Response({"detail": "preferences could not be saved"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(request.data, status=status.HTTP_200_OK)
