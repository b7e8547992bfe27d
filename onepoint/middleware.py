import logging
import time

from django.http import JsonResponse

from onepoint.health import database_status

logger = logging.getLogger("onepoint.requests")

API_PREFIX = "/api/"
HEALTH_PATHS = ("/api/health/", "/api/health")


class RequestLoggingMiddleware:
    """Logs every API call with its status and duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith(API_PREFIX):
            return self.get_response(request)

        started = time.monotonic()
        response = self.get_response(request)
        duration_ms = (time.monotonic() - started) * 1000

        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.get_full_path(),
            response.status_code,
            duration_ms,
        )
        return response


class DatabaseAvailabilityMiddleware:
    """Answers 503 for API calls while the database cannot be reached."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path.startswith(API_PREFIX) and request.path not in HEALTH_PATHS:
            db = database_status()
            if not db.connected:
                logger.error("Database unavailable: %s", db.error)
                return JsonResponse(
                    {"success": False, "message": "Database connection not available"},
                    status=503,
                )
        return self.get_response(request)
