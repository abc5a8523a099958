"""
Montonio Configuration
======================

Typed configuration for the Montonio gateway, resolved once from Django
settings (which read the environment, see `backend/settings.py`) and cached
for the lifetime of the process.

`MontonioSettingsForm` is the settings schema shown to administrators:
test mode toggle, API keys, the bank transfer detail and the components of
the payment description. The same form validates the raw values coming from
Django settings and supplies their defaults.

Settings
--------
- MONTONIO_ACCESS_KEY           → access key issued by Montonio (required)
- MONTONIO_SECRET_KEY           → secret key used to sign/verify tokens (required)
- MONTONIO_SANDBOX_MODE         → True = sandbox, False = production
- MONTONIO_MERCHANT_NAME        → bank transfer detail, e.g. "Donation"
- MONTONIO_INCLUDE_DONATION_ID  → add donation id to the description (default on)
- MONTONIO_INCLUDE_CAMPAIGN_NAME→ add form/campaign title (default off)
- MONTONIO_INCLUDE_PERSONAL_CODE→ add donor's personal code (default on)
- MONTONIO_DESCRIPTION_SEPARATOR→ separator between components (default " / ")
- SITE_URL                      → public base URL used for callback URLs
- DONATION_SUCCESS_URL          → donor landing page after a paid donation
- DONATION_FAILURE_URL          → donor landing page after a failed donation

Author: DSP Development Team
Date: 2025-10-02
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django import forms
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.translation import gettext_lazy as _

SANDBOX_PAYMENTS_URL = "https://sandbox-payments.montonio.com"
PRODUCTION_PAYMENTS_URL = "https://payments.montonio.com"

# Settings form field -> Django setting name
SETTING_NAMES = {
    "sandbox": "MONTONIO_SANDBOX_MODE",
    "access_key": "MONTONIO_ACCESS_KEY",
    "secret_key": "MONTONIO_SECRET_KEY",
    "merchant_name": "MONTONIO_MERCHANT_NAME",
    "include_donation_id": "MONTONIO_INCLUDE_DONATION_ID",
    "include_campaign_name": "MONTONIO_INCLUDE_CAMPAIGN_NAME",
    "include_personal_code": "MONTONIO_INCLUDE_PERSONAL_CODE",
    "description_separator": "MONTONIO_DESCRIPTION_SEPARATOR",
}

RELATED_SETTINGS = set(SETTING_NAMES.values()) | {
    "SITE_URL",
    "DONATION_SUCCESS_URL",
    "DONATION_FAILURE_URL",
}


class MontonioSettingsForm(forms.Form):
    sandbox = forms.BooleanField(label=_("Enable Test Mode"), required=False, initial=False)
    access_key = forms.CharField(label=_("Access key"), max_length=255)
    secret_key = forms.CharField(label=_("Secret key"), max_length=255)
    merchant_name = forms.CharField(
        label=_('Bank transfer detail (e.g. "Donation")'),
        max_length=255,
        required=False,
        initial="",
    )
    include_donation_id = forms.BooleanField(
        label=_("Include Donation ID"),
        help_text=_("Add donation ID to payment description"),
        required=False,
        initial=True,
    )
    include_campaign_name = forms.BooleanField(
        label=_("Include Campaign Name"),
        help_text=_("Add form/campaign name to payment description"),
        required=False,
        initial=False,
    )
    include_personal_code = forms.BooleanField(
        label=_("Include Personal Code"),
        help_text=_("Add Estonian personal code to payment description (if provided)"),
        required=False,
        initial=True,
    )
    description_separator = forms.CharField(
        label=_("Description Components Separator"),
        help_text=_('Character(s) to separate description components (e.g., " / " or " - ")'),
        max_length=10,
        required=False,
        strip=False,
        initial=" / ",
    )

    def clean_description_separator(self):
        return self.cleaned_data.get("description_separator") or " / "


@dataclass(frozen=True)
class MontonioConfig:
    access_key: str
    secret_key: str
    sandbox: bool
    merchant_name: str
    include_donation_id: bool
    include_campaign_name: bool
    include_personal_code: bool
    description_separator: str
    site_url: str
    success_url: str
    failure_url: str

    @property
    def environment(self) -> str:
        return "sandbox" if self.sandbox else "production"

    @property
    def payments_base_url(self) -> str:
        return SANDBOX_PAYMENTS_URL if self.sandbox else PRODUCTION_PAYMENTS_URL

    @classmethod
    def from_settings(cls) -> "MontonioConfig":
        """
        Validate the Montonio settings and build the typed config.

        Raises:
            ImproperlyConfigured: if required values are missing or invalid.
        """
        data = {}
        for field_name, setting_name in SETTING_NAMES.items():
            value = getattr(settings, setting_name, None)
            if value is None:
                value = MontonioSettingsForm.base_fields[field_name].initial
            data[field_name] = value

        form = MontonioSettingsForm(data=data)
        if not form.is_valid():
            problems = "; ".join(
                f"{SETTING_NAMES.get(field, field)}: {' '.join(errors)}"
                for field, errors in form.errors.items()
            )
            raise ImproperlyConfigured(f"Invalid Montonio settings ({problems})")

        site_url = getattr(settings, "SITE_URL", "").rstrip("/")
        cleaned = form.cleaned_data
        return cls(
            access_key=cleaned["access_key"],
            secret_key=cleaned["secret_key"],
            sandbox=cleaned["sandbox"],
            merchant_name=cleaned["merchant_name"],
            include_donation_id=cleaned["include_donation_id"],
            include_campaign_name=cleaned["include_campaign_name"],
            include_personal_code=cleaned["include_personal_code"],
            description_separator=cleaned["description_separator"],
            site_url=site_url,
            success_url=getattr(settings, "DONATION_SUCCESS_URL", f"{site_url}/donation/success/"),
            failure_url=getattr(settings, "DONATION_FAILURE_URL", f"{site_url}/donation/failed/"),
        )


_config: Optional[MontonioConfig] = None


def get_config() -> MontonioConfig:
    global _config
    if _config is None:
        _config = MontonioConfig.from_settings()
    return _config


def reset_config(**kwargs) -> None:
    """Drop the cached config (connected to `setting_changed`)."""
    global _config
    setting = kwargs.get("setting")
    if setting is None or setting in RELATED_SETTINGS:
        _config = None
