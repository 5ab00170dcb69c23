"""
Form validation for the dashboard actions. The server is authoritative.

- Invoice: create and update invoice forms
- User: registration form
"""

from .schemas import (
    InvoiceInput,
    UserInput,
    ValidationResult,
    validate_invoice,
    validate_user,
)
from .errors import (
    ErrorCode,
    FieldError,
    PersistenceError,
    group_field_errors,
)

__all__ = [
    "InvoiceInput",
    "UserInput",
    "ValidationResult",
    "validate_invoice",
    "validate_user",
    "ErrorCode",
    "FieldError",
    "PersistenceError",
    "group_field_errors",
]
