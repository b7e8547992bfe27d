import logging
import traceback

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db.utils import InterfaceError, OperationalError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class InvalidTransition(exceptions.APIException):
    """A booking status or payment change the lifecycle does not allow."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This change is not allowed for the booking in its current state."
    default_code = "invalid_transition"


class DatabaseUnavailable(exceptions.APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Database connection not available"
    default_code = "database_unavailable"


# -----------------------------
# Helpers
# -----------------------------
def _first_message(detail):
    """Pick the first human readable message out of a DRF error detail."""
    if isinstance(detail, dict):
        for value in detail.values():
            message = _first_message(value)
            if message:
                return message
        return ""
    if isinstance(detail, (list, tuple)):
        for item in detail:
            message = _first_message(item)
            if message:
                return message
        return ""
    return str(detail)


def error_payload(message, errors=None, code=None):
    payload = {"success": False, "message": message}
    if errors:
        payload["errors"] = errors
    if code:
        payload["code"] = code
    return payload


# -----------------------------
# DRF exception handler
# -----------------------------
def api_exception_handler(exc, context):
    """
    Wraps every error raised inside an API view in the
    ``{"success": false, "message": ...}`` envelope.

    DRF handles its own exceptions (plus ``Http404`` and Django's
    ``PermissionDenied``). Lost database connections become a 503;
    anything else is logged and answered with a 500. The traceback is
    only exposed while DEBUG is on.
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(str(exc) or "Not found.")
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied(str(exc) or None)
    elif isinstance(exc, (OperationalError, InterfaceError)):
        logger.error("Database error: %s", exc)
        exc = DatabaseUnavailable()

    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view")
        payload = error_payload("Server error")
        if settings.DEBUG:
            payload["error"] = {
                "message": str(exc),
                "stack": traceback.format_exc(),
            }
        return Response(payload, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    detail = response.data
    errors = None
    if isinstance(exc, exceptions.ValidationError):
        errors = detail
        message = _first_message(detail) or "Invalid input."
    else:
        message = _first_message(detail) or str(exc)

    code = None
    if isinstance(exc, exceptions.APIException):
        codes = exc.get_codes()
        if isinstance(codes, str):
            code = codes
        elif isinstance(detail, dict) and isinstance(detail.get("code"), str):
            code = detail["code"]

    response.data = error_payload(message, errors=errors, code=code)
    return response
