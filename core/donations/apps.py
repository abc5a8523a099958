"""
Donations App Configuration - DSP

Registers the donations app (donation forms, donation records and the
payment gateway registry) with Django.

Author: DSP Development Team
Date: 2025-10-02
"""

from django.apps import AppConfig


class DonationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.donations"
    label = "donations"
    verbose_name = "Donations"
