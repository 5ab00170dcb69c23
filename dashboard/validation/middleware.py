"""
Converts what escapes a view into a response.

Form actions signal a successful write by raising ``Redirect``; that becomes
a 302 here. Other exceptions are logged once with the request id. JSON
callers then get the error envelope, while page requests fall through to
Django's own 500 handling.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, HttpResponseRedirect

from ..navigation import Redirect
from .errors import ErrorCode, error_envelope

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "An unexpected error occurred. Please try again later."


def wants_json(request: HttpRequest) -> bool:
    return (
        "application/json" in (request.content_type or "")
        or "application/json" in request.headers.get("Accept", "")
        or request.headers.get("X-Requested-With") == "XMLHttpRequest"
    )


class ErrorHandlingMiddleware:
    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.get_response(request)

    def process_exception(self, request: HttpRequest, exc: Exception) -> Optional[HttpResponse]:
        if isinstance(exc, Redirect):
            return HttpResponseRedirect(exc.to)

        request_id = getattr(request, "request_id", "no-id")
        logger.exception(f"Unhandled {type(exc).__name__} on {request.method} {request.path}")

        if not wants_json(request):
            return None

        message = f"{type(exc).__name__}: {exc}" if settings.DEBUG else GENERIC_FAILURE_MESSAGE
        return error_envelope(ErrorCode.INTERNAL_ERROR, message, request_id, status=500)
