"""
Donation Ledger
===============

Status and metadata updates on donation records, used by payment
gateways. Gateways never construct SQL or touch `Donation` rows directly for
status changes; they go through `DonationLedger` so every transition is
serialized per record and logged the same way.

Idempotency:
- `update_status` is a no-op when the record already has the target status,
  so replayed gateway callbacks converge on the same final state.
- Updates run inside `transaction.atomic()` with `select_for_update()`.

Author: DSP Development Team
Date: 2025-10-02
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction

from .models import Donation

logger = logging.getLogger(__name__)

VALID_STATUSES = {choice for choice, _label in Donation.STATUS_CHOICES}


def insert_payment(**donation_data: Any) -> Donation:
    """
    Record a new donation (normally in `pending` state).

    A random `purchase_key` is generated when the caller does not supply one.
    """
    if not donation_data.get("purchase_key"):
        donation_data["purchase_key"] = Donation.generate_purchase_key()
    donation_data.setdefault("status", Donation.STATUS_PENDING)

    with transaction.atomic():
        donation = Donation.objects.create(**donation_data)

    logger.info(
        "Recorded %s donation %s via %s (amount=%s %s).",
        donation.status,
        donation.pk,
        donation.gateway,
        donation.amount,
        donation.currency,
    )
    return donation


class DonationLedger:
    """Status store for donation records keyed by payment id."""

    def update_status(self, payment_id: Any, status: str) -> bool:
        """
        Move a donation to `status`.

        Returns:
            True if the status changed, False if the donation already had
            that status or does not exist.

        Raises:
            ValueError: if `status` is not a known donation status.
        """
        if status not in VALID_STATUSES:
            raise ValueError(f"Unknown donation status: {status!r}")

        with transaction.atomic():
            try:
                donation = Donation.objects.select_for_update().get(pk=payment_id)
            except (Donation.DoesNotExist, ValueError, TypeError):
                logger.warning(
                    "Donation %s not found; status %s not applied.", payment_id, status
                )
                return False

            if donation.status == status:
                logger.info("Donation %s already %s.", payment_id, status)
                return False

            previous = donation.status
            donation.status = status
            donation.save(update_fields=["status", "updated_at"])

        logger.info("Donation %s status %s -> %s.", payment_id, previous, status)
        return True

    def update_meta(self, payment_id: Any, **fields: Any) -> None:
        """Store additional donation data (e.g. the donor's personal code)."""
        Donation.objects.filter(pk=payment_id).update(**fields)
