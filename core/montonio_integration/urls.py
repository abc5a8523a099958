from django.urls import path
from .views import MontonioCheckoutView, MontonioConfigView

app_name = "montonio_integration"

urlpatterns = [
    path("montonio/config/", MontonioConfigView.as_view(), name="montonio-config"),
    path("montonio/checkout/", MontonioCheckoutView.as_view(), name="montonio-checkout"),
]
