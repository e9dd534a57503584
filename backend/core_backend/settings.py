"""
Django settings for the recipe book backend.

Configuration comes from the environment (a ``.env`` file next to
``manage.py`` is loaded first). Data lives in a local SQLite database.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.getenv("SECRET_KEY", "django-insecure-local-recipe-book")

DEBUG = env_bool("DEBUG", True)

ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]


# Application definition

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "rest_framework",
    "core_backend",
    "measurements",
    "costing",
    "recipes",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "core_backend.urls"

TEMPLATES = []


# Database

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("RECIPE_BOOK_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Internationalization

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True


# Django REST framework
# Single local user: no authentication, JSON only.

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "UNAUTHENTICATED_USER": None,
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}


# Recipe book storage

RECIPE_BOOK = {
    "MATERIALS_KEY": os.getenv("RECIPE_BOOK_MATERIALS_KEY", "rawMaterials"),
    "RECIPES_KEY": os.getenv("RECIPE_BOOK_RECIPES_KEY", "recipes"),
    "FAMILIES_KEY": os.getenv("RECIPE_BOOK_FAMILIES_KEY", "families"),
    # Serve the starter content for collections that were never saved.
    "SEED_WHEN_EMPTY": env_bool("RECIPE_BOOK_SEED_WHEN_EMPTY", True),
}


# Logging

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
        # App loggers propagate to the root console handler.
        "recipes": {"level": LOG_LEVEL},
        "costing": {"level": LOG_LEVEL},
        "core_backend": {"level": LOG_LEVEL},
    },
}
