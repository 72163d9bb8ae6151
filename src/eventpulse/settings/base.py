"""Base Django settings for the EventPulse project."""

from pathlib import Path

from decouple import Csv, config

BASE_DIR = Path(__file__).resolve().parent.parent.parent

VERSION = "1.0.0"
SITE_NAME = config("SITE_NAME", default="EventPulse")

SECRET_KEY = config("SECRET_KEY", default="django-insecure-eventpulse-dev-key")
DEBUG = config("DEBUG", default=False, cast=bool)
ALLOWED_HOSTS = config("ALLOWED_HOSTS", cast=Csv(), default="localhost,127.0.0.1,testserver")

SERVICE_URL = config("SERVICE_URL", default="http://localhost:8000")
SERVICE_DESCRIPTION = config("SERVICE_DESCRIPTION", default="Local development server")

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "ninja_extra",
    "common",
    "accounts",
    "events",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "common.middleware.StructlogContextMiddleware",
]

ROOT_URLCONF = "eventpulse.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": config("DB_NAME", default=str(BASE_DIR / "eventpulse.sqlite3")),
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "eventpulse",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = config("TIME_ZONE", default="UTC")
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Blob storage keys for the persisted aggregates
EVENT_STORE_KEY = config("EVENT_STORE_KEY", default="eventpulse_events")
USER_STORE_KEY = config("USER_STORE_KEY", default="eventpulse_user")

# Lifecycle windows
CHECK_IN_OPENS_BEFORE_MINUTES = config("CHECK_IN_OPENS_BEFORE_MINUTES", default=60, cast=int)
FEEDBACK_GRACE_PERIOD_HOURS = config("FEEDBACK_GRACE_PERIOD_HOURS", default=24, cast=int)

FRONTEND_BASE_URL = config("FRONTEND_BASE_URL", default="http://localhost:5173")
