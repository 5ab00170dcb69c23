from datetime import date
from decimal import Decimal

import pytest

from dashboard.models import Invoice
from dashboard.navigation import Redirect
from dashboard.repositories import InvoiceRepository
from dashboard.services.invoice_service import (
    CREATE_FAILED_MESSAGE,
    DELETE_FAILED_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    UPDATE_FAILED_MESSAGE,
    InvoiceActions,
    to_cents,
)
from dashboard.state import MutationState
from tests.factories import InvoiceFactory

INVOICES_PATH = "/dashboard/invoices"
FIXED_TODAY = date(2026, 10, 19)


@pytest.fixture
def actions(invoice_repository, page_cache_double):
    return InvoiceActions(
        repository=invoice_repository,
        cache=page_cache_double,
        today=lambda: FIXED_TODAY,
    )


class TestToCents:
    @pytest.mark.parametrize("amount, cents", [
        ("0.01", 1),
        ("100", 10000),
        ("19.999", 2000),
        ("12.345", 1235),
        ("9999998.99", 999999899),
    ])
    def test_rounds_to_whole_minor_units(self, amount, cents):
        assert to_cents(Decimal(amount)) == cents


class TestCreateInvoice:
    def test_persists_revalidates_and_redirects(self, actions, invoice_repository, page_cache_double):
        with pytest.raises(Redirect) as exc_info:
            actions.create_invoice(MutationState(), {"customerId": "c1", "amount": "100", "status": "pending"})

        assert exc_info.value.to == INVOICES_PATH
        assert invoice_repository.calls == [("insert", ("c1", 10000, "pending", "2026-10-19"))]
        page_cache_double.revalidate_path.assert_called_once_with(INVOICES_PATH)

    def test_invalid_form_returns_field_errors_without_touching_the_database(
        self, actions, invoice_repository, page_cache_double
    ):
        state = actions.create_invoice(MutationState(), {"customerId": "", "amount": "-5", "status": "bogus"})

        assert state.message == MISSING_FIELDS_MESSAGE
        assert set(state.errors) == {"customerId", "amount", "status"}
        assert invoice_repository.calls == []
        page_cache_double.revalidate_path.assert_not_called()

    @pytest.mark.parametrize("amount", ["0", "-1", "9999999", "12000000"])
    def test_out_of_range_amounts_never_reach_the_database(self, actions, invoice_repository, amount):
        state = actions.create_invoice(None, {"customerId": "c1", "amount": amount, "status": "paid"})

        assert "amount" in state.errors
        assert invoice_repository.calls == []

    def test_database_failure_is_reported_as_state(self, failing_invoice_repository, page_cache_double):
        actions = InvoiceActions(repository=failing_invoice_repository, cache=page_cache_double)

        state = actions.create_invoice(None, {"customerId": "c1", "amount": "100", "status": "pending"})

        assert state == MutationState(message=CREATE_FAILED_MESSAGE)
        page_cache_double.revalidate_path.assert_not_called()

    def test_ignores_undeclared_form_fields(self, actions, invoice_repository):
        form = {"customerId": "c1", "amount": "1.5", "status": "paid", "date": "1999-01-01", "id": "x"}
        with pytest.raises(Redirect):
            actions.create_invoice(None, form)

        assert invoice_repository.calls == [("insert", ("c1", 150, "paid", "2026-10-19"))]


class TestUpdateInvoice:
    def test_updates_without_touching_the_date(self, actions, invoice_repository, page_cache_double):
        with pytest.raises(Redirect) as exc_info:
            actions.update_invoice("inv-1", None, {"customerId": "c2", "amount": "42.10", "status": "paid"})

        assert exc_info.value.to == INVOICES_PATH
        assert invoice_repository.calls == [("update", ("inv-1", "c2", 4210, "paid"))]
        page_cache_double.revalidate_path.assert_called_once_with(INVOICES_PATH)

    def test_validation_failure_reuses_the_create_message(self, actions, invoice_repository):
        state = actions.update_invoice("inv-1", None, {"customerId": "c2", "amount": "x", "status": "paid"})

        assert state.message == "Missing Fields. Failed to create Invoice."
        assert list(state.errors) == ["amount"]
        assert invoice_repository.calls == []

    def test_database_failure_is_reported_as_state(self, failing_invoice_repository, page_cache_double):
        actions = InvoiceActions(repository=failing_invoice_repository, cache=page_cache_double)

        state = actions.update_invoice("inv-1", None, {"customerId": "c2", "amount": "5", "status": "paid"})

        assert state == MutationState(message=UPDATE_FAILED_MESSAGE)
        page_cache_double.revalidate_path.assert_not_called()


class TestDeleteInvoice:
    def test_deletes_and_revalidates(self, actions, invoice_repository, page_cache_double):
        assert actions.delete_invoice("inv-42") is None
        assert invoice_repository.calls == [("delete", ("inv-42",))]
        page_cache_double.revalidate_path.assert_called_once_with(INVOICES_PATH)

    def test_database_failure_skips_revalidation(self, failing_invoice_repository, page_cache_double):
        actions = InvoiceActions(repository=failing_invoice_repository, cache=page_cache_double)

        state = actions.delete_invoice("inv-42")

        assert state == MutationState(message=DELETE_FAILED_MESSAGE)
        page_cache_double.revalidate_path.assert_not_called()


@pytest.mark.django_db
class TestInvoiceActionsAgainstDatabase:
    def test_create_writes_a_row_for_today(self, page_cache_double):
        actions = InvoiceActions(cache=page_cache_double, today=lambda: date(2026, 10, 19))

        with pytest.raises(Redirect):
            actions.create_invoice(None, {"customerId": "c1", "amount": "100", "status": "pending"})

        invoice = Invoice.objects.get()
        assert invoice.customer_id == "c1"
        assert invoice.amount == 10000
        assert invoice.status == "pending"
        assert invoice.date == date(2026, 10, 19)

    def test_update_changes_fields_but_keeps_date(self, page_cache_double):
        invoice = InvoiceFactory(customer_id="c1", amount=500, status="pending", date=date(2024, 1, 2))
        actions = InvoiceActions(cache=page_cache_double)

        with pytest.raises(Redirect):
            actions.update_invoice(str(invoice.pk), None, {"customerId": "c9", "amount": "7.25", "status": "paid"})

        invoice.refresh_from_db()
        assert (invoice.customer_id, invoice.amount, invoice.status) == ("c9", 725, "paid")
        assert invoice.date == date(2024, 1, 2)

    def test_delete_removes_the_row(self, page_cache_double):
        invoice = InvoiceFactory()
        actions = InvoiceActions(cache=page_cache_double)

        assert actions.delete_invoice(str(invoice.pk)) is None
        assert not Invoice.objects.filter(pk=invoice.pk).exists()

    def test_delete_of_missing_row_affects_nothing_and_still_revalidates(self, page_cache_double):
        InvoiceFactory()
        actions = InvoiceActions(cache=page_cache_double)

        assert InvoiceRepository().delete("inv-42") == 0
        assert actions.delete_invoice("inv-42") is None

        assert Invoice.objects.count() == 1
        page_cache_double.revalidate_path.assert_called_once_with(INVOICES_PATH)

    def test_values_are_bound_not_interpolated(self, page_cache_double):
        hostile = "c1'); DROP TABLE invoices; --"
        actions = InvoiceActions(cache=page_cache_double)

        with pytest.raises(Redirect):
            actions.create_invoice(None, {"customerId": hostile, "amount": "1", "status": "paid"})

        assert Invoice.objects.get().customer_id == hostile
