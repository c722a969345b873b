"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from shoresquad.api.views import (
    BootstrapView,
    CrewListView,
    EventListView,
    HealthView,
    JoinCrewView,
    JoinEventView,
    LocationView,
    PreferencesView,
    StatsView,
    WeatherView,
)

urlpatterns = [
    path("weather", WeatherView.as_view(), name="weather"),
    path("location", LocationView.as_view(), name="location"),
    path("events", EventListView.as_view(), name="events"),
    path("events/<str:event_id>/join", JoinEventView.as_view(), name="join-event"),
    path("crews", CrewListView.as_view(), name="crews"),
    path("crews/<str:crew_id>/join", JoinCrewView.as_view(), name="join-crew"),
    path("stats", StatsView.as_view(), name="stats"),
    path("bootstrap", BootstrapView.as_view(), name="bootstrap"),
    path("health", HealthView.as_view(), name="health"),
    path("preferences", PreferencesView.as_view(), name="preferences"),
]
