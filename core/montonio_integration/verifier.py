"""
Montonio Callback Verifier
==========================

Decides the outcome of an inbound Montonio callback (server notification or
the donor's browser return). Both carry the same parameters:

- `payment_token` → signed token issued by Montonio (alias `order-token`,
                    read only when `payment_token` is absent)
- `id`            → donation (payment) id
- `give-form-id`  → donation form id
- `payment-mode`  → informational, always "montonio"

Flow
----
1. Reject if token, payment id or form id is empty or "0" → MissingParameterError
2. Decode the token with the secret key                   → TokenDecodeError
3. Reject if a required claim is missing                  → MalformedClaimError
4. Compare access key, merchant reference and status
5. All three match → donation "publish", success page
6. Anything else   → donation "abandoned", failure page

Errors 1-3 leave the donation untouched. A mismatch in step 4 is a normal
business outcome, not an error. `verify_callback` has no framework
dependencies beyond its arguments: the view passes the config and the ledger.

Author: DSP Development Team
Date: 2025-10-02
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

from .config import MontonioConfig
from .exceptions import MissingParameterError
from .tokens import PaymentTokenClaim, decode_payment_token

logger = logging.getLogger(__name__)

PAID_STATUS = "PAID"
STATUS_PAID = "publish"
STATUS_ABANDONED = "abandoned"


class PaymentLedger(Protocol):
    def update_status(self, payment_id: Any, status: str) -> bool: ...


@dataclass(frozen=True)
class CallbackParams:
    payment_token: str
    payment_id: str
    form_id: str
    payment_mode: str = ""

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "CallbackParams":
        def _value(name: str) -> str:
            value = data.get(name)
            if isinstance(value, (list, tuple)):
                value = value[-1] if value else ""
            return "" if value is None else str(value).strip()

        # a present payment_token is used even when empty
        token_name = "payment_token" if data.get("payment_token") is not None else "order-token"
        return cls(
            payment_token=_value(token_name),
            payment_id=_value("id"),
            form_id=_value("give-form-id"),
            payment_mode=_value("payment-mode"),
        )

    def missing(self):
        names = {
            "payment_token": self.payment_token,
            "id": self.payment_id,
            "give-form-id": self.form_id,
        }
        # "0" counts as absent
        return [name for name, value in names.items() if value in ("", "0")]


@dataclass(frozen=True)
class CallbackOutcome:
    status: str
    redirect_url: str
    claim: PaymentTokenClaim
    checks: Dict[str, bool]


def verify_callback(
    params: CallbackParams,
    config: MontonioConfig,
    ledger: PaymentLedger,
) -> CallbackOutcome:
    """
    Verify a Montonio callback and apply its outcome to the donation.

    Returns:
        The applied status and the page the donor is sent to.

    Raises:
        MissingParameterError, TokenDecodeError, MalformedClaimError
    """
    missing = params.missing()
    if missing:
        raise MissingParameterError(missing)

    claim = decode_payment_token(params.payment_token, config.secret_key)

    checks = {
        "access_key_match": claim.access_key == config.access_key,
        "merchant_reference_match": claim.merchant_reference == params.payment_id,
        "payment_status_paid": claim.payment_status == PAID_STATUS,
    }

    if all(checks.values()):
        ledger.update_status(params.payment_id, STATUS_PAID)
        status, redirect_url = STATUS_PAID, config.success_url
    else:
        ledger.update_status(params.payment_id, STATUS_ABANDONED)
        status, redirect_url = STATUS_ABANDONED, config.failure_url

    # decoded claim without the access key
    logger.info(
        "Payment %s (payment_id=%s, merchant_reference=%s, payment_status=%s, checks=%s).",
        "successful" if status == STATUS_PAID else "abandoned",
        params.payment_id,
        claim.merchant_reference,
        claim.payment_status,
        checks,
    )
    return CallbackOutcome(status, redirect_url, claim, checks)


def describe_request(data: Mapping[str, Any], params: Optional[CallbackParams] = None) -> Dict[str, Any]:
    """Loggable summary of a callback request without the raw token."""
    params = params or CallbackParams.from_data(data)
    return {
        "id": params.payment_id,
        "give-form-id": params.form_id,
        "payment-mode": params.payment_mode,
        "has_token": bool(params.payment_token),
    }
