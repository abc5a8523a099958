"""
Donation Models - DSP

DonationForm is a campaign donors give to. Donation is the payment record
that payment gateways move between pending, paid ("publish") and abandoned.
"""

import secrets

from django.db import models


class DonationForm(models.Model):
    """
    Model für Spendenformulare / Kampagnen
    """

    title = models.CharField(max_length=200, verbose_name="Title")
    currency = models.CharField(max_length=3, default="EUR", verbose_name="Currency")
    is_active = models.BooleanField(default=True, verbose_name="Active")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created at")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="Updated at")

    class Meta:
        verbose_name = "Donation form"
        verbose_name_plural = "Donation forms"
        ordering = ["title"]

    def __str__(self):
        return self.title


class Donation(models.Model):
    """Einzelne Spende (payment record) inklusive Zahlungsstatus."""

    STATUS_PENDING = "pending"
    STATUS_PUBLISH = "publish"
    STATUS_ABANDONED = "abandoned"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PUBLISH, "Paid"),
        (STATUS_ABANDONED, "Abandoned"),
    ]

    form = models.ForeignKey(
        DonationForm,
        on_delete=models.PROTECT,
        related_name="donations",
        verbose_name="Donation form",
    )
    price_id = models.CharField(
        max_length=50,
        blank=True,
        default="0",
        verbose_name="Price option",
        help_text="Selected price level of the form (0 for custom amounts)",
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Amount")
    currency = models.CharField(max_length=3, default="EUR", verbose_name="Currency")
    email = models.EmailField(verbose_name="E-mail")
    first_name = models.CharField(max_length=100, blank=True, verbose_name="First name")
    last_name = models.CharField(max_length=100, blank=True, verbose_name="Last name")
    purchase_key = models.CharField(
        max_length=64, unique=True, verbose_name="Purchase key"
    )
    gateway = models.CharField(max_length=50, verbose_name="Gateway")
    status = models.CharField(
        max_length=12,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        verbose_name="Status",
    )
    personal_code = models.CharField(
        max_length=32,
        blank=True,
        verbose_name="Personal code",
        help_text="Estonian personal identification code, if the donor provided one",
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created at")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="Updated at")

    class Meta:
        verbose_name = "Donation"
        verbose_name_plural = "Donations"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["gateway", "status"]),
        ]

    def __str__(self):
        return f"#{self.pk} {self.amount} {self.currency} ({self.status})"

    @staticmethod
    def generate_purchase_key() -> str:
        return secrets.token_hex(16)
