"""
Payment Gateway Registry
========================

Gateway apps describe themselves with a `PaymentGateway` and register it from
their `AppConfig.ready()`. The donations app uses the registry to list the
payment options of a form and to route gateway callbacks (`give-listener`).

Registration is idempotent per key: registering the same key again replaces
the previous entry, so repeated `ready()` calls (test runners, autoreload)
do not duplicate gateways.

Author: DSP Development Team
Date: 2025-10-02
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentGateway:
    """
    Description of a payment gateway offered on donation forms.

    Attributes:
        key: Identifier stored on `Donation.gateway` and used as the
            `give-listener` discriminator.
        admin_label: Label shown in the admin.
        checkout_label: Label shown to donors.
        form_output: Renders the payment option snippet for a donation form.
        listener: Django view handling callbacks for this gateway.
    """

    key: str
    admin_label: str
    checkout_label: str
    form_output: Optional[Callable[..., str]] = None
    listener: Optional[Callable[[HttpRequest], HttpResponse]] = None


_registry: Dict[str, PaymentGateway] = {}


def register_gateway(gateway: PaymentGateway) -> PaymentGateway:
    if gateway.key in _registry:
        logger.debug("Replacing registered payment gateway %s", gateway.key)
    _registry[gateway.key] = gateway
    return gateway


def get_gateway(key: Optional[str]) -> Optional[PaymentGateway]:
    if not key:
        return None
    return _registry.get(key)


def get_gateways() -> List[PaymentGateway]:
    """Registered gateways in registration order."""
    return list(_registry.values())
