from django.apps import AppConfig
from django.core import checks


class DashboardConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dashboard"
    verbose_name = "Acme dashboard"

    def ready(self):
        from .hashers import check_password_hasher

        checks.register(check_password_hasher, checks.Tags.security)
