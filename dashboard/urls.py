from django.urls import path

from .views import auth_views
from .views import invoice_views

app_name = "dashboard"

urlpatterns = [
    path('login', auth_views.login_view, name='login'),
    path('register', auth_views.register_view, name='register'),
    path('logout', auth_views.logout_view, name='logout'),
    path('dashboard/invoices', invoice_views.invoice_list, name='invoice_list'),
    path('dashboard/invoices/create', invoice_views.invoice_create, name='invoice_create'),
    path('dashboard/invoices/<str:invoice_id>/edit', invoice_views.invoice_edit, name='invoice_edit'),
    path('dashboard/invoices/<str:invoice_id>/delete', invoice_views.invoice_delete, name='invoice_delete'),
]
