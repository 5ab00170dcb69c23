"""
Startup checks for the process environment.

Called from settings and from the WSGI entry point so a misconfigured
deployment refuses to boot instead of failing on the first form submission.
"""

import logging

import environ
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

env = environ.Env()

PRODUCTION_REQUIRED = ("SECRET_KEY", "DATABASE_URL")
PRODUCTION_DATABASE_SCHEMES = ("postgres", "postgresql", "pgsql", "postgis")
MIN_SECRET_KEY_LENGTH = 50


def _fail(message):
    logger.critical(message)
    raise ImproperlyConfigured(message)


def validate_env():
    is_production = env.bool("PRODUCTION", default=False)

    try:
        page_cache_timeout = env.int("PAGE_CACHE_TIMEOUT", default=3600)
    except ValueError:
        _fail("PAGE_CACHE_TIMEOUT must be a whole number of seconds")
    if page_cache_timeout <= 0:
        _fail("PAGE_CACHE_TIMEOUT must be positive; the invoice listing relies on it expiring")

    if not is_production:
        if not env.str("SECRET_KEY", default=""):
            logger.warning("SECRET_KEY not set, using the development key")
        return

    missing = [name for name in PRODUCTION_REQUIRED if not env.str(name, default="")]
    if missing:
        _fail(f"Missing required environment variables in production: {', '.join(missing)}")

    secret_key = env.str("SECRET_KEY")
    if secret_key.startswith("django-insecure") or len(secret_key) < MIN_SECRET_KEY_LENGTH:
        _fail("SECRET_KEY must be a long, random string in production")

    scheme = env.str("DATABASE_URL").split("://", 1)[0].lower()
    if scheme not in PRODUCTION_DATABASE_SCHEMES:
        _fail(f"DATABASE_URL must point at PostgreSQL in production, got '{scheme}'")

    logger.info("Production environment validated")
