"""
Error types shared by the validators, repositories and middleware.

Validators collect ``FieldError`` items and hand the form back a
``{field: [messages]}`` mapping. Repositories raise ``PersistenceError``.
Anything else reaching the middleware on a JSON request is answered with::

    {"success": false, "error": {"code": ..., "message": ...}, "request_id": ...}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List

from django.http import JsonResponse


class ErrorCode(str, Enum):
    FIELD_REQUIRED = "FIELD_REQUIRED"
    FIELD_INVALID = "FIELD_INVALID"
    FIELD_TOO_SHORT = "FIELD_TOO_SHORT"
    FIELD_OUT_OF_RANGE = "FIELD_OUT_OF_RANGE"
    FIELD_INVALID_FORMAT = "FIELD_INVALID_FORMAT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class FieldError:
    field: str
    code: str
    message: str


class PersistenceError(Exception):
    """A single SQL statement failed; the driver error is kept as ``__cause__``."""

    def __init__(self, operation: str, table: str):
        self.operation = operation
        self.table = table
        super().__init__(f"{operation} on {table} failed")


def group_field_errors(errors: Iterable[FieldError]) -> Dict[str, List[str]]:
    """Collapse field errors into ``{field: [messages]}`` keeping first-seen order."""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        grouped.setdefault(error.field, []).append(error.message)
    return grouped


def error_envelope(code: ErrorCode, message: str, request_id: str, status: int) -> JsonResponse:
    return JsonResponse(
        {
            "success": False,
            "error": {"code": code.value, "message": message},
            "request_id": request_id,
        },
        status=status,
    )
