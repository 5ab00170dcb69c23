"""Health check endpoint for the load balancer and uptime monitors."""

import logging
import time

from django.conf import settings
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from .models import Invoice, User
from .page_cache import page_cache

logger = logging.getLogger(__name__)

PROBE_PATH = "/_health"


def _check_database(details):
    started = time.perf_counter()
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
        ok = cursor.fetchone() == (1,)
    details["database_latency_ms"] = round((time.perf_counter() - started) * 1000, 2)
    return ok


def _check_tables(details):
    missing = sorted({User._meta.db_table, Invoice._meta.db_table} - set(connection.introspection.table_names()))
    if missing:
        details["missing_tables"] = missing
    return not missing


def _check_cache(details):
    # Goes through the page cache so a misconfigured backend shows up here
    # before it silently serves stale listings.
    marker = timezone.now().isoformat()
    page_cache.store(PROBE_PATH, marker)
    ok = page_cache.get(PROBE_PATH) == marker
    page_cache.backend.delete(page_cache.make_key(PROBE_PATH))
    return ok


CHECKS = (
    ("database", _check_database, DatabaseError),
    ("tables", _check_tables, DatabaseError),
    ("cache", _check_cache, Exception),
)


@require_GET
def health_check(request):
    checks = {}
    details = {}
    for name, check, failure in CHECKS:
        try:
            checks[name] = check(details)
        except failure as e:
            logger.warning(f"Health check '{name}' failed: {e}")
            checks[name] = False
            details[f"{name}_error"] = str(e)

    healthy = all(checks.values())
    return JsonResponse({
        "status": "healthy" if healthy else "degraded",
        "version": getattr(settings, "APP_VERSION", "1.0.0"),
        "timestamp": timezone.now().isoformat(),
        "checks": checks,
        "details": details,
    }, status=200 if healthy else 503)
