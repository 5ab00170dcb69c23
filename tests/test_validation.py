from decimal import Decimal

import pytest

from dashboard.validation import validate_invoice, validate_user
from dashboard.validation.schemas import (
    AMOUNT_NOT_A_NUMBER_MESSAGE,
    AMOUNT_TOO_HIGH_MESSAGE,
    AMOUNT_TOO_LOW_MESSAGE,
    CUSTOMER_REQUIRED_MESSAGE,
    EMAIL_INVALID_MESSAGE,
    PASSWORD_TOO_SHORT_MESSAGE,
    REPEATED_PASSWORD_TOO_SHORT_MESSAGE,
    STATUS_INVALID_MESSAGE,
    USERNAME_TOO_SHORT_MESSAGE,
    coerce_number,
)


def invoice_form(**overrides):
    data = {"customerId": "c1", "amount": "100", "status": "pending"}
    data.update(overrides)
    return data


def user_form(**overrides):
    data = {
        "username": "alice",
        "email": "alice@example.com",
        "password": "secret1",
        "repeated_password": "secret1",
    }
    data.update(overrides)
    return data


class TestCoerceNumber:
    @pytest.mark.parametrize("raw, expected", [
        ("100", Decimal("100")),
        ("  12.50 ", Decimal("12.50")),
        ("", Decimal("0")),
        (None, Decimal("0")),
        (7, Decimal("7")),
        ("1e3", Decimal("1000")),
        (".5", Decimal("0.5")),
        ("0x10", Decimal("16")),
        ("0b101", Decimal("5")),
        ("0o17", Decimal("15")),
        ("-Infinity", Decimal("-Infinity")),
    ])
    def test_coerces_to_decimal(self, raw, expected):
        assert coerce_number(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "12abc", "NaN", "$5", "1_000", "1,000", "-0x10", "inf", "0x"])
    def test_unparsable_text_yields_none(self, raw):
        assert coerce_number(raw) is None


class TestValidateInvoice:
    def test_valid_form_yields_typed_record(self):
        result = validate_invoice(invoice_form(amount="250.75", status="paid"))
        assert result.valid is True
        assert result.field_errors == {}
        assert result.data.customer_id == "c1"
        assert result.data.amount == Decimal("250.75")
        assert result.data.status == "paid"

    @pytest.mark.parametrize("amount", ["0.01", "1", "100", "9999998.99", "9999998"])
    def test_amounts_inside_range_pass(self, amount):
        result = validate_invoice(invoice_form(amount=amount))
        assert result.valid is True

    @pytest.mark.parametrize("amount", ["0", "-5", "-0.01", "", None])
    def test_non_positive_amounts_fail(self, amount):
        result = validate_invoice(invoice_form(amount=amount))
        assert result.valid is False
        assert result.field_errors == {"amount": [AMOUNT_TOO_LOW_MESSAGE]}

    @pytest.mark.parametrize("amount", ["9999999", "9999999.99", "10000000", "Infinity"])
    def test_amounts_at_or_above_ceiling_fail(self, amount):
        result = validate_invoice(invoice_form(amount=amount))
        assert result.valid is False
        assert result.field_errors == {"amount": [AMOUNT_TOO_HIGH_MESSAGE]}

    def test_non_numeric_amount_is_a_validation_error(self):
        result = validate_invoice(invoice_form(amount="twelve"))
        assert result.valid is False
        assert result.field_errors == {"amount": [AMOUNT_NOT_A_NUMBER_MESSAGE]}

    @pytest.mark.parametrize("status", ["pending", "paid"])
    def test_known_statuses_pass(self, status):
        assert validate_invoice(invoice_form(status=status)).valid is True

    @pytest.mark.parametrize("status", ["bogus", "PAID", "", None, "overdue"])
    def test_unknown_statuses_fail(self, status):
        result = validate_invoice(invoice_form(status=status))
        assert result.valid is False
        assert result.field_errors == {"status": [STATUS_INVALID_MESSAGE]}

    @pytest.mark.parametrize("customer_id", ["", None])
    def test_customer_is_required(self, customer_id):
        result = validate_invoice(invoice_form(customerId=customer_id))
        assert result.field_errors == {"customerId": [CUSTOMER_REQUIRED_MESSAGE]}

    def test_every_invalid_field_is_reported(self):
        result = validate_invoice({"customerId": "", "amount": "-5", "status": "bogus"})
        assert result.valid is False
        assert result.data is None
        assert result.field_errors == {
            "customerId": [CUSTOMER_REQUIRED_MESSAGE],
            "amount": [AMOUNT_TOO_LOW_MESSAGE],
            "status": [STATUS_INVALID_MESSAGE],
        }

    def test_undeclared_fields_are_ignored(self):
        result = validate_invoice(invoice_form(id="injected", date="1999-01-01"))
        assert result.valid is True
        assert not hasattr(result.data, "date")


class TestValidateUser:
    def test_valid_form_yields_typed_record(self):
        result = validate_user(user_form())
        assert result.valid is True
        assert result.data.username == "alice"
        assert result.data.email == "alice@example.com"

    def test_short_username(self):
        result = validate_user(user_form(username="al"))
        assert result.field_errors == {"username": [USERNAME_TOO_SHORT_MESSAGE]}

    @pytest.mark.parametrize("email", ["not-an-email", "a@", "", "alice@localhost@x"])
    def test_invalid_email(self, email):
        result = validate_user(user_form(email=email))
        assert result.field_errors == {"email": [EMAIL_INVALID_MESSAGE]}

    def test_password_messages_are_kept_verbatim(self):
        result = validate_user(user_form(password="12345", repeated_password="123"))
        assert result.field_errors == {
            "password": ["Password must be at least 4 characters long."],
            "repeated_password": ["Password must be the same as password."],
        }
        assert PASSWORD_TOO_SHORT_MESSAGE == "Password must be at least 4 characters long."
        assert REPEATED_PASSWORD_TOO_SHORT_MESSAGE == "Password must be the same as password."

    def test_five_character_password_is_rejected_despite_message(self):
        result = validate_user(user_form(password="abcde", repeated_password="abcde"))
        assert set(result.field_errors) == {"password", "repeated_password"}

    def test_missing_fields_are_reported(self):
        result = validate_user({})
        assert set(result.field_errors) == {"username", "email", "password", "repeated_password"}

    def test_validation_does_not_compare_passwords(self):
        result = validate_user(user_form(password="secret1", repeated_password="different"))
        assert result.valid is True
