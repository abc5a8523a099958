from django.urls import path
from .views import GatewayListView

app_name = "donations"

urlpatterns = [
    path("forms/<int:form_id>/gateways/", GatewayListView.as_view(), name="form-gateways"),
]
