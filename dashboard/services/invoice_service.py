import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Mapping, Optional

from django.utils import timezone

from ..navigation import Navigator
from ..page_cache import INVOICES_PATH, PageCache, page_cache
from ..repositories import InvoiceRepository
from ..state import MutationState
from ..validation import PersistenceError, validate_invoice

logger = logging.getLogger(__name__)

# Update failures reuse the create wording.
MISSING_FIELDS_MESSAGE = "Missing Fields. Failed to create Invoice."
CREATE_FAILED_MESSAGE = "Database Error: Failed to create invoice."
UPDATE_FAILED_MESSAGE = "Database Error: Failed to update invoice."
DELETE_FAILED_MESSAGE = "Database Error: Failed to delete invoice."


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def utc_today() -> date:
    return timezone.now().date()


class InvoiceActions:
    """
    Create, update and delete invoices from dashboard form submissions.

    Each action validates, issues one statement, and on success revalidates
    the invoices listing. Create and update then redirect to it, so they
    only return when something went wrong.
    """

    def __init__(
        self,
        repository: Optional[InvoiceRepository] = None,
        cache: Optional[PageCache] = None,
        navigator: Optional[Navigator] = None,
        today: Callable[[], date] = utc_today,
    ):
        self.repository = repository or InvoiceRepository()
        self.cache = cache or page_cache
        self.navigator = navigator or Navigator()
        self.today = today

    def create_invoice(self, previous_state: Optional[MutationState], form_data: Mapping[str, Any]) -> MutationState:
        result = validate_invoice(form_data)
        if not result.valid:
            return MutationState(errors=result.field_errors, message=MISSING_FIELDS_MESSAGE)

        invoice = result.data
        amount_in_cents = to_cents(invoice.amount)
        issued_on = self.today().isoformat()

        try:
            self.repository.insert(invoice.customer_id, amount_in_cents, invoice.status, issued_on)
        except PersistenceError:
            logger.error("Failed to create invoice for customer %s", invoice.customer_id, exc_info=True)
            return MutationState(message=CREATE_FAILED_MESSAGE)

        logger.info("Created invoice for customer %s (%s cents, %s)", invoice.customer_id, amount_in_cents, invoice.status)
        self.cache.revalidate_path(INVOICES_PATH)
        self.navigator.redirect(INVOICES_PATH)

    def update_invoice(self, invoice_id: str, previous_state: Optional[MutationState], form_data: Mapping[str, Any]) -> MutationState:
        result = validate_invoice(form_data)
        if not result.valid:
            return MutationState(errors=result.field_errors, message=MISSING_FIELDS_MESSAGE)

        invoice = result.data
        amount_in_cents = to_cents(invoice.amount)

        try:
            self.repository.update(invoice_id, invoice.customer_id, amount_in_cents, invoice.status)
        except PersistenceError:
            logger.error("Failed to update invoice %s", invoice_id, exc_info=True)
            return MutationState(message=UPDATE_FAILED_MESSAGE)

        logger.info("Updated invoice %s", invoice_id)
        self.cache.revalidate_path(INVOICES_PATH)
        self.navigator.redirect(INVOICES_PATH)

    def delete_invoice(self, invoice_id: str) -> Optional[MutationState]:
        try:
            self.repository.delete(invoice_id)
        except PersistenceError:
            logger.error("Failed to delete invoice %s", invoice_id, exc_info=True)
            return MutationState(message=DELETE_FAILED_MESSAGE)

        logger.info("Deleted invoice %s", invoice_id)
        self.cache.revalidate_path(INVOICES_PATH)
        return None
