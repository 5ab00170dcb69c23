"""
Request context for log records.

Each request gets an id (taken from an incoming ``X-Request-ID`` header when
the proxy supplies one) that is echoed back on the response. The id and the
signed-in user are kept on a thread-local for the duration of the request so
log lines written deep inside the form actions can be correlated.
"""

import logging
import threading
import uuid

from django.utils.functional import LazyObject, empty

logger = logging.getLogger(__name__)

_context = threading.local()

ANONYMOUS = "anonymous"
NO_REQUEST = "no-id"


class RequestIDMiddleware:
    header = "X-Request-ID"

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.request_id = request.headers.get(self.header) or uuid.uuid4().hex
        _context.request = request
        try:
            response = self.get_response(request)
        finally:
            _context.request = None
        response[self.header] = request.request_id
        return response


def _current_request():
    return getattr(_context, "request", None)


def get_current_request_id():
    request = _current_request()
    return getattr(request, "request_id", None) or NO_REQUEST


def get_current_user_id():
    request = _current_request()
    user = getattr(request, "user", None)
    # Never resolve the lazy user from a log call; that would query the session store.
    if isinstance(user, LazyObject):
        user = user._wrapped
    if user is None or user is empty or not user.is_authenticated:
        return ANONYMOUS
    return str(user.pk)
