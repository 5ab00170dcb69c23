"""
Acme Dashboard - Django Settings

Everything environment-specific is read through django-environ; see
acmeflow/env_validation.py for what production refuses to start without.
"""

import re
from pathlib import Path

import dj_database_url
import environ

from acmeflow.env_validation import validate_env

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env()
validate_env()

IS_PRODUCTION = env.bool("PRODUCTION", default=False)
DEBUG = env.bool("DEBUG", default=not IS_PRODUCTION)
APP_VERSION = env.str("APP_VERSION", default="1.0.0")

# =============================================================================
# SECURITY
# =============================================================================
SECRET_KEY = env.str("SECRET_KEY", default="django-insecure-acme-dashboard-local-only")

if IS_PRODUCTION:
    ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=[])
    if env.str("RENDER_EXTERNAL_HOSTNAME", default=""):
        ALLOWED_HOSTS.append(env.str("RENDER_EXTERNAL_HOSTNAME"))
else:
    ALLOWED_HOSTS = ["*"]

CSRF_TRUSTED_ORIGINS = [f"https://{host}" for host in ALLOWED_HOSTS if "*" not in host]

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = "Lax"
SESSION_COOKIE_AGE = 60 * 60 * 24 * 14
CSRF_COOKIE_SAMESITE = "Lax"

SECURE_SSL_REDIRECT = IS_PRODUCTION
SESSION_COOKIE_SECURE = IS_PRODUCTION
CSRF_COOKIE_SECURE = IS_PRODUCTION
if IS_PRODUCTION:
    SECURE_HSTS_SECONDS = 60 * 60 * 24 * 365
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"
    X_FRAME_OPTIONS = "DENY"

# =============================================================================
# AUTHENTICATION
# =============================================================================
AUTH_USER_MODEL = "dashboard.User"
AUTHENTICATION_BACKENDS = ["django.contrib.auth.backends.ModelBackend"]

# New hashes are bcrypt, work factor 10 (enforced by the dashboard.E001 check)
PASSWORD_HASHERS = [
    "dashboard.hashers.BCryptTenRoundsPasswordHasher",
    "django.contrib.auth.hashers.PBKDF2PasswordHasher",
]

LOGIN_URL = "/login"
LOGIN_REDIRECT_URL = "/dashboard/invoices"
REGISTER_REDIRECT_URL = "/login"
LOGOUT_REDIRECT_URL = "/login"

# =============================================================================
# APPLICATION
# =============================================================================
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.staticfiles",
    "dashboard.apps.DashboardConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "acmeflow.middleware.RequestIDMiddleware",
    "dashboard.validation.middleware.ErrorHandlingMiddleware",
]

ROOT_URLCONF = "acmeflow.urls"
WSGI_APPLICATION = "acmeflow.wsgi.application"

# =============================================================================
# DATABASE
# =============================================================================
def _database_url():
    # Neon adds channel_binding, which psycopg's libpq options reject
    url = env.str("DATABASE_URL", default="").strip()
    return re.sub(r"[?&]channel_binding=[^&]+", "", url).replace("?&", "?").rstrip("&?")


DATABASES = {
    "default": dj_database_url.parse(
        _database_url() or f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
        conn_max_age=600,
        conn_health_checks=True,
        ssl_require=IS_PRODUCTION,
    )
}
if IS_PRODUCTION:
    DATABASES["default"].setdefault("OPTIONS", {})["connect_timeout"] = 10

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# =============================================================================
# CACHING
# =============================================================================
REDIS_URL = env.str("REDIS_URL", default="")

if IS_PRODUCTION and REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": REDIS_URL,
            "OPTIONS": {"CLIENT_CLASS": "django_redis.client.DefaultClient"},
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "acme-dashboard",
        }
    }

# Seconds a rendered listing stays cached unless a write revalidates it first
PAGE_CACHE_TIMEOUT = env.int("PAGE_CACHE_TIMEOUT", default=60 * 60)

# =============================================================================
# LOGGING
# =============================================================================
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "structured": {
            "format": (
                "[%(asctime)s] %(levelname)s [%(name)s:%(lineno)s] "
                "[request_id=%(request_id)s user=%(user_id)s] %(message)s"
            ),
        },
    },
    "filters": {
        "request_context": {"()": "acmeflow.logging_filters.RequestContextFilter"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "structured",
            "filters": ["request_context"],
        },
    },
    "root": {"handlers": ["console"], "level": env.str("LOG_LEVEL", default="INFO")},
    "loggers": {
        "dashboard": {"level": env.str("DASHBOARD_LOG_LEVEL", default="INFO"), "propagate": True},
    },
}

# =============================================================================
# I18N / STATIC
# =============================================================================
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedStaticFilesStorage"},
}
