"""
URL configuration for the DSP donations backend.

- /                      → gateway listener (`?give-listener=<gateway>`)
- /admin/                → Django admin
- /api/donations/        → donation forms and their payment options
- /api/payments/         → payment gateway endpoints (Montonio)
"""

from django.contrib import admin
from django.urls import include, path

from core.donations.views import gateway_listener

urlpatterns = [
    path("", gateway_listener, name="gateway-listener"),
    path("admin/", admin.site.urls),
    path("api/donations/", include("core.donations.urls")),
    path("api/payments/", include("core.montonio_integration.urls")),
]
