"""
Montonio Integration Package - DSP
=============================================================

Montonio payment gateway for donation forms (`core.donations`). Donors are
redirected to the Montonio payment page (Baltic and Finnish bank links);
Montonio reports the result back with a signed payment token that we verify
before marking the donation paid or abandoned.

Current Scope
--------------------
- Registers the "Montonio" option on donation forms (gateway registry).
- Payment initiation (see views.py / gateway.py):
  * records a pending donation
  * signs the payment data and redirects to Montonio
- Callback verification (see verifier.py):
  * `payment_token` / `order-token` decoded with the secret key
  * access key, merchant reference and status must all match for "paid"
  * any mismatch marks the donation abandoned
  * missing or undecodable input is rejected with HTTP 400

Structure
---------
- __init__.py     (this file, documentation)
- apps.py         → App configuration (`MontonioIntegrationConfig`)
- config.py       → Typed settings (`MontonioConfig`) and admin settings form
- exceptions.py   → Callback rejection errors
- tokens.py       → Payment token codec (PyJWT)
- verifier.py     → Callback verification
- gateway.py      → Payment URL, description, locale, form snippet
- serializers.py  → Donation submission validation
- views.py        → Listener, checkout and config endpoints
- urls.py         → Routes for Montonio endpoints

Author: DSP Development Team
Date: 2025-10-02
"""
