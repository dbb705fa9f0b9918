"""Liveness endpoint for load balancers and container probes."""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)

HEALTH_CACHE_KEY = "health_check"


def _database_reachable():
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        logger.warning(f"Health check could not reach the database: {exc}")
        return False
    return True


def _cache_reachable():
    # The Redis cache swallows connection errors, so a miss is the only signal
    cache.set(HEALTH_CACHE_KEY, "ok", timeout=1)
    return cache.get(HEALTH_CACHE_KEY) == "ok"


def health_check(request):
    """
    Report store and cache reachability.

    Only the record store decides the status code (200 or 503); the
    cache is informational.
    """
    database_ok = _database_reachable()
    body = {
        "status": "healthy" if database_ok else "unhealthy",
        "database": "connected" if database_ok else "disconnected",
        "cache": "connected" if _cache_reachable() else "disconnected",
    }
    return JsonResponse(body, status=200 if database_ok else 503)
