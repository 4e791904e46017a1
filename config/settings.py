"""
Salon Core – Django Settings (Infrastructure Only)
===================================================
Django serves as the HTTP container for the booking/ledger core.
The engines never import Django; only adapters/django_api does.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("SALON_SECRET_KEY", "salon-dev-key-replace-before-deployment")

DEBUG = os.environ.get("SALON_DEBUG", "true").lower() == "true"

ALLOWED_HOSTS = [h for h in os.environ.get("SALON_ALLOWED_HOSTS", "").split(",") if h]

# ── Installed Apps ────────────────────────────────────────────
# The adapter is stateless; no models, no migrations.
INSTALLED_APPS = [
    "django.contrib.contenttypes",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# Appointments, accounts and vouchers live in the external data store.
DATABASES = {}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "de-ch"
TIME_ZONE = os.environ.get("SALON_TIME_ZONE", "Europe/Zurich")
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Salon defaults ────────────────────────────────────────────
# Deployment-wide fallbacks; per-salon overrides live in the config store.
SALON_BOOKING_RULES = {
    "min_lead_time_minutes": 120,
    "max_horizon_days": 30,
    "cancellation_cutoff_hours": 24,
    "slot_granularity_minutes": 15,
    "buffer_between_bookings_minutes": 0,
}

SALON_LOYALTY_RATES = {
    "points_per_chf": "1",
    "points_per_redemption": "100",
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "salon": {
            "handlers": ["console"],
            "level": os.environ.get("SALON_LOG_LEVEL", "INFO"),
        },
    },
}
