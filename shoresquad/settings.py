"""Base Django settings for the ShoreSquad service."""
from __future__ import annotations

import os

from django.core.exceptions import ImproperlyConfigured

from shoresquad.core.config import (
    DATA_GOV_SG_CURRENT_URL,
    DATA_GOV_SG_FORECAST_URL,
    IP_GEOLOCATION_URL,
)


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


def optional_float(name: str) -> float | None:
    value = os.environ.get(name)
    if not value:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ImproperlyConfigured(f"Environment variable {name} must be a number") from exc


SECRET_KEY = env("DJANGO_SECRET_KEY")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "rest_framework",
    "shoresquad.api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "shoresquad.urls"

WSGI_APPLICATION = "shoresquad.wsgi.application"

# No models: everything persistent lives in the storage cache alias below.
DATABASES = {}

# The storage alias plays the role of the browser's local storage: string
# keys, JSON strings as values, never expiring.
SHORESQUAD_STORAGE_ALIAS = os.environ.get("SHORESQUAD_STORAGE_ALIAS", "storage")
STORAGE_DIR = os.environ.get("SHORESQUAD_STORAGE_DIR")
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "shoresquad-default",
    },
    "storage": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "shoresquad-storage",
        "TIMEOUT": None,
    },
}
if STORAGE_DIR:
    CACHES["storage"] = {
        "BACKEND": "django.core.cache.backends.filebased.FileBasedCache",
        "LOCATION": STORAGE_DIR,
        "TIMEOUT": None,
    }

SHORESQUAD_CURRENT_URL = os.environ.get("SHORESQUAD_CURRENT_URL", DATA_GOV_SG_CURRENT_URL)
SHORESQUAD_FORECAST_URL = os.environ.get("SHORESQUAD_FORECAST_URL", DATA_GOV_SG_FORECAST_URL)
# Empty leaves wind at its fallback value. Set it to
# https://api.data.gov.sg/v1/environment/wind-speed for live station wind,
# at the price of a third request.
SHORESQUAD_WIND_SPEED_URL = os.environ.get("SHORESQUAD_WIND_SPEED_URL", "")
SHORESQUAD_GEOLOCATION_URL = os.environ.get("SHORESQUAD_GEOLOCATION_URL", IP_GEOLOCATION_URL)
SHORESQUAD_PREFERRED_STATION = os.environ.get("SHORESQUAD_PREFERRED_STATION", "S24")
SHORESQUAD_DEFAULT_LAT = os.environ.get("SHORESQUAD_DEFAULT_LAT", "1.3815")
SHORESQUAD_DEFAULT_LNG = os.environ.get("SHORESQUAD_DEFAULT_LNG", "103.9556")
SHORESQUAD_DEFAULT_NAME = os.environ.get("SHORESQUAD_DEFAULT_NAME", "Pasir Ris Beach, Singapore")
WEATHER_REQUEST_TIMEOUT = optional_float("WEATHER_REQUEST_TIMEOUT")

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "default"},
    },
    "root": {
        "handlers": ["console"],
        "level": os.environ.get("SHORESQUAD_LOG_LEVEL", "INFO"),
    },
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("SHORESQUAD_TIME_ZONE", "Asia/Singapore")
USE_I18N = True
USE_TZ = True
