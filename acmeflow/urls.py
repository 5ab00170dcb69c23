from django.urls import path, include
from dashboard import health

urlpatterns = [
    path("health/", health.health_check, name="health_check"),
    path("", include("dashboard.urls", namespace="dashboard")),
]
