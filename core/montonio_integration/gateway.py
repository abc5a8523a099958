"""
Montonio Payment Initiation
===========================

Helpers used when a donor chooses Montonio on a donation form:

- the callback URL Montonio notifies and returns the donor to,
- the payment page language derived from the active site language,
- the payment description (bank transfer detail) built from the configured
  components,
- the signed payment URL the donor is redirected to,
- the form snippet shown for the Montonio option.

Author: DSP Development Team
Date: 2025-10-02
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from django.template.loader import render_to_string
from django.utils.translation import gettext_lazy as _

from .config import MontonioConfig
from .tokens import encode_payment_token

GATEWAY_KEY = "montonio"
GATEWAY_LABEL = _("Montonio")
PAYMENT_CURRENCY = "EUR"
DEFAULT_LOCALE = "en_US"

# Site language -> Montonio payment page locale
LOCALES = {
    "et": "et",
    "lv": "lv",
    "lt": "lt",
    "pl": "pl",
    "fi": "fi",
    "ru": "ru",
}


def build_listener_url(config: MontonioConfig, payment_id: Any, form_id: Any) -> str:
    query = urlencode({
        "give-listener": GATEWAY_KEY,
        "id": payment_id,
        "give-form-id": form_id,
        "payment-mode": GATEWAY_KEY,
    })
    return f"{config.site_url}/?{query}"


def resolve_locale(language_code: Optional[str]) -> str:
    """Map a Django language code ("et", "pl-pl", "ru_UA", ...) to a Montonio locale."""
    if not language_code:
        return DEFAULT_LOCALE
    base = language_code.replace("_", "-").split("-")[0].lower()
    return LOCALES.get(base, DEFAULT_LOCALE)


def compose_description(
    config: MontonioConfig,
    donation_id: Any,
    campaign_name: str = "",
    personal_code: str = "",
) -> str:
    parts = [config.merchant_name]
    if config.include_donation_id:
        parts.append(str(donation_id))
    if config.include_campaign_name:
        parts.append(campaign_name)
    if config.include_personal_code:
        parts.append(personal_code)
    return config.description_separator.join(part for part in parts if part)


def build_payment_data(
    config: MontonioConfig,
    donation,
    *,
    locale: str = DEFAULT_LOCALE,
    campaign_name: str = "",
    personal_code: str = "",
) -> Dict[str, Any]:
    """Payment payload for a pending donation (unsigned)."""
    listener_url = build_listener_url(config, donation.pk, donation.form_id)
    return {
        "amount": float(donation.amount),
        "currency": PAYMENT_CURRENCY,
        "merchant_reference": str(donation.pk),
        "merchant_name": config.merchant_name,
        "merchant_notification_url": listener_url,
        "merchant_return_url": listener_url,
        "checkout_email": donation.email,
        "checkout_first_name": donation.first_name,
        "checkout_last_name": donation.last_name,
        "preselected_locale": locale,
        "payment_information_unstructured": compose_description(
            config, donation.pk, campaign_name, personal_code
        ),
    }


def get_payment_url(config: MontonioConfig, payment_data: Dict[str, Any]) -> str:
    token = encode_payment_token(payment_data, config.access_key, config.secret_key)
    return f"{config.payments_base_url}?{urlencode({'payment_token': token})}"


def render_form_output(form=None) -> str:
    return render_to_string(
        "montonio_integration/form_output.html", {"form": form}
    )
