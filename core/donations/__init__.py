"""
Donations Package - DSP
=============================================================

Host side of donation handling. Stores donation forms (campaigns) and the
donation records that payment gateways update, and keeps the registry of
payment gateways available on donation forms.

Structure
---------
- apps.py         → App configuration (`DonationsConfig`)
- models.py       → `DonationForm`, `Donation`
- gateways.py     → Payment gateway registry
- ledger.py       → Status updates for donation records
- views.py        → Gateway listing and listener dispatch
- urls.py         → Routes for donation endpoints

Author: DSP Development Team
Date: 2025-10-02
"""
