import logging

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse, HttpResponseRedirect
from django.views.decorators.http import require_GET, require_POST

from ..models import Invoice
from ..page_cache import INVOICES_PATH, page_cache
from ..services.invoice_service import InvoiceActions

logger = logging.getLogger(__name__)


@login_required
@require_GET
@page_cache.cached(INVOICES_PATH)
def invoice_list(request):
    invoices = [
        {
            'id': invoice.pk,
            'customer_id': invoice.customer_id,
            'amount': invoice.amount,
            'amount_display': invoice.amount_display,
            'status': invoice.status,
            'date': invoice.date.isoformat(),
        }
        for invoice in Invoice.objects.all()
    ]
    return JsonResponse({'invoices': invoices})


@login_required
@require_POST
def invoice_create(request):
    state = InvoiceActions().create_invoice(None, request.POST)
    return JsonResponse(state.to_dict(), status=400)


@login_required
@require_POST
def invoice_edit(request, invoice_id):
    state = InvoiceActions().update_invoice(invoice_id, None, request.POST)
    return JsonResponse(state.to_dict(), status=400)


@login_required
@require_POST
def invoice_delete(request, invoice_id):
    state = InvoiceActions().delete_invoice(invoice_id)
    if state is not None:
        return JsonResponse(state.to_dict(), status=400)
    return HttpResponseRedirect(INVOICES_PATH)
