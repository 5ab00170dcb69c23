from .invoice_service import InvoiceActions
from .user_service import RegistrationService

__all__ = [
    'InvoiceActions',
    'RegistrationService',
]
