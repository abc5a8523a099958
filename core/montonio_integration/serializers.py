"""
Montonio Integration Serializers

Validates the donation submission posted when a donor picks Montonio.
Field names follow the donation form's posted data.
"""

from decimal import Decimal

from rest_framework import serializers

from core.donations.models import DonationForm


class DonationSubmissionSerializer(serializers.Serializer):
    """
    Serializer für die Spenden-Eingabe eines Formulars
    """

    form_id = serializers.PrimaryKeyRelatedField(
        queryset=DonationForm.objects.filter(is_active=True), source="form"
    )
    price_id = serializers.CharField(required=False, allow_blank=True, default="0", max_length=50)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    email = serializers.EmailField()
    first_name = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    last_name = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    personal_code = serializers.CharField(
        required=False, allow_blank=True, default="", max_length=32
    )

    def validate_price_id(self, value):
        return value or "0"
