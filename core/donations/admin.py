"""
Donations Admin - DSP

Django admin configuration for donation forms and donation records.
Donation status is read-only here: status changes come from the payment
gateways through the donation ledger.

Author: DSP Development Team
Date: 2025-10-02
"""

from django.contrib import admin

from .gateways import get_gateway
from .models import Donation, DonationForm


@admin.register(DonationForm)
class DonationFormAdmin(admin.ModelAdmin):
    list_display = ["title", "currency", "is_active", "created_at"]
    list_filter = ["is_active", "currency"]
    search_fields = ["title"]
    ordering = ["title"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display = [
        "id", "form", "amount", "currency", "email", "gateway_label", "status", "created_at"
    ]
    list_filter = ["status", "gateway", "created_at"]
    search_fields = ["email", "first_name", "last_name", "purchase_key"]
    readonly_fields = ["status", "purchase_key", "gateway", "created_at", "updated_at"]

    fieldsets = (
        ("Donation", {"fields": ("form", "price_id", "amount", "currency", "gateway", "status")}),
        ("Donor", {"fields": ("email", "first_name", "last_name", "personal_code")}),
        (
            "Metadata",
            {
                "fields": ("purchase_key", "created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    @admin.display(description="Gateway", ordering="gateway")
    def gateway_label(self, obj):
        gateway = get_gateway(obj.gateway)
        return gateway.admin_label if gateway else obj.gateway
