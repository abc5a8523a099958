"""
Montonio Integration AppConfig
==============================

This module defines the Django application configuration for
`core.montonio_integration`. On startup it:

- Registers the Montonio gateway with the donations gateway registry, so the
  option shows up on donation forms and `?give-listener=montonio` callbacks
  are routed to `MontonioListenerView`.
- Connects `setting_changed` so the cached Montonio config is rebuilt when
  settings are overridden (tests).
- Resolves the config once and logs a warning if the keys are missing.

Operational notes
-----------------
- `ready()` runs on every process start; it does no DB or network calls.
- Registration is idempotent (the registry is keyed by gateway id).

Author: DSP Development Team
Date: 2025-10-02
"""

import logging

from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class MontonioIntegrationConfig(AppConfig):
    """
    App configuration for the `core.montonio_integration` package.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "core.montonio_integration"
    verbose_name = "Montonio Integration"

    def ready(self):
        from django.test.signals import setting_changed

        from core.donations.gateways import PaymentGateway, register_gateway

        from .config import get_config, reset_config
        from .gateway import GATEWAY_KEY, GATEWAY_LABEL, render_form_output
        from .views import MontonioListenerView

        register_gateway(
            PaymentGateway(
                key=GATEWAY_KEY,
                admin_label=GATEWAY_LABEL,
                checkout_label=GATEWAY_LABEL,
                form_output=render_form_output,
                listener=MontonioListenerView.as_view(),
            )
        )
        setting_changed.connect(reset_config, dispatch_uid="montonio_reset_config")

        try:
            config = get_config()
        except ImproperlyConfigured as exc:
            logger.warning("Montonio gateway is not configured: %s", exc)
        else:
            logger.info("Montonio gateway ready (%s).", config.environment)
