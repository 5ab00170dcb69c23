"""
Domain-Specific Validation

One pure function per form. Each reads only its declared fields from the
submitted mapping and returns a ValidationResult: either the coerced record
or a ``{field: [messages]}`` map. Nothing here raises for bad input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import EmailValidator

from .errors import ErrorCode, FieldError, group_field_errors

T = TypeVar("T")

# Text accepted by a JavaScript Number() conversion: decimal literals with an
# optional sign and exponent, signed Infinity, and unsigned 0x / 0o / 0b integers.
_DECIMAL_LITERAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INFINITY_LITERAL = re.compile(r"([+-]?)Infinity")
_PREFIXED_INTEGER = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")

INVOICE_STATUSES = ("pending", "paid")

AMOUNT_LOWER_BOUND = Decimal("0")
AMOUNT_UPPER_BOUND = Decimal("9999999")

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6

CUSTOMER_REQUIRED_MESSAGE = "Please select a customer."
AMOUNT_TOO_LOW_MESSAGE = "Please enter an amount greater than $0."
AMOUNT_TOO_HIGH_MESSAGE = "Please enter an amount less than $9,999,999.99"
AMOUNT_NOT_A_NUMBER_MESSAGE = "Expected number, received nan"
STATUS_INVALID_MESSAGE = "Please select an invoice status."

USERNAME_TOO_SHORT_MESSAGE = "Username must be at least 3 characters long."
EMAIL_INVALID_MESSAGE = "Please provide a valid email address."
# The two password messages do not describe the length rule they enforce.
# They are shown to users as-is.
PASSWORD_TOO_SHORT_MESSAGE = "Password must be at least 4 characters long."
REPEATED_PASSWORD_TOO_SHORT_MESSAGE = "Password must be the same as password."

_email_validator = EmailValidator(message=EMAIL_INVALID_MESSAGE)


@dataclass(frozen=True)
class InvoiceInput:
    customer_id: str
    amount: Decimal
    status: str


@dataclass(frozen=True)
class UserInput:
    username: str
    email: str
    password: str
    repeated_password: str


@dataclass
class ValidationResult(Generic[T]):
    valid: bool
    data: Optional[T] = None
    field_errors: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: T) -> "ValidationResult[T]":
        return cls(valid=True, data=data)

    @classmethod
    def invalid(cls, errors: List[FieldError]) -> "ValidationResult[T]":
        return cls(valid=False, field_errors=group_field_errors(errors))


def coerce_number(value: Any) -> Optional[Decimal]:
    """
    Convert submitted form text to a number with JavaScript Number() rules:
    missing or blank input becomes 0, surrounding whitespace is ignored, hex,
    octal and binary integers are accepted, and anything else that is not a
    plain decimal literal (digit separators, currency symbols, "NaN") yields
    None.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return None if value.is_nan() else value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = Decimal(str(value))
        return None if number.is_nan() else number

    text = str(value).strip()
    if not text:
        return Decimal("0")
    if _DECIMAL_LITERAL.fullmatch(text):
        return Decimal(text)
    if _PREFIXED_INTEGER.fullmatch(text):
        return Decimal(int(text, 0))
    infinity = _INFINITY_LITERAL.fullmatch(text)
    if infinity:
        return Decimal(f"{infinity.group(1)}Infinity")
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def validate_invoice(data: Mapping[str, Any]) -> ValidationResult[InvoiceInput]:
    errors: List[FieldError] = []

    customer_id = data.get("customerId")
    if not isinstance(customer_id, str) or not customer_id:
        errors.append(FieldError(
            field="customerId",
            code=ErrorCode.FIELD_REQUIRED.value,
            message=CUSTOMER_REQUIRED_MESSAGE,
        ))

    amount = coerce_number(data.get("amount"))
    if amount is None:
        errors.append(FieldError(
            field="amount",
            code=ErrorCode.FIELD_INVALID.value,
            message=AMOUNT_NOT_A_NUMBER_MESSAGE,
        ))
    elif not amount > AMOUNT_LOWER_BOUND:
        errors.append(FieldError(
            field="amount",
            code=ErrorCode.FIELD_OUT_OF_RANGE.value,
            message=AMOUNT_TOO_LOW_MESSAGE,
        ))
    elif not amount < AMOUNT_UPPER_BOUND:
        errors.append(FieldError(
            field="amount",
            code=ErrorCode.FIELD_OUT_OF_RANGE.value,
            message=AMOUNT_TOO_HIGH_MESSAGE,
        ))

    status = data.get("status")
    if status not in INVOICE_STATUSES:
        errors.append(FieldError(
            field="status",
            code=ErrorCode.FIELD_INVALID.value,
            message=STATUS_INVALID_MESSAGE,
        ))

    if errors:
        return ValidationResult.invalid(errors)
    return ValidationResult.ok(InvoiceInput(customer_id=customer_id, amount=amount, status=status))


def is_valid_email(value: str) -> bool:
    try:
        _email_validator(value)
    except DjangoValidationError:
        return False
    return True


def validate_user(data: Mapping[str, Any]) -> ValidationResult[UserInput]:
    errors: List[FieldError] = []

    username = _as_text(data.get("username"))
    email = _as_text(data.get("email"))
    password = _as_text(data.get("password"))
    repeated_password = _as_text(data.get("repeated_password"))

    if len(username) < USERNAME_MIN_LENGTH:
        errors.append(FieldError(
            field="username",
            code=ErrorCode.FIELD_TOO_SHORT.value,
            message=USERNAME_TOO_SHORT_MESSAGE,
        ))

    if not is_valid_email(email):
        errors.append(FieldError(
            field="email",
            code=ErrorCode.FIELD_INVALID_FORMAT.value,
            message=EMAIL_INVALID_MESSAGE,
        ))

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(FieldError(
            field="password",
            code=ErrorCode.FIELD_TOO_SHORT.value,
            message=PASSWORD_TOO_SHORT_MESSAGE,
        ))

    if len(repeated_password) < PASSWORD_MIN_LENGTH:
        errors.append(FieldError(
            field="repeated_password",
            code=ErrorCode.FIELD_TOO_SHORT.value,
            message=REPEATED_PASSWORD_TOO_SHORT_MESSAGE,
        ))

    if errors:
        return ValidationResult.invalid(errors)
    return ValidationResult.ok(UserInput(
        username=username,
        email=email,
        password=password,
        repeated_password=repeated_password,
    ))
