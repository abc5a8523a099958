"""
Montonio Payment Tokens
=======================

Montonio exchanges payment data as HS256-signed JWTs using the merchant's
secret key:

- Outbound: the payment data is signed into `payment_token` and appended to
  the Montonio payment page URL.
- Inbound: Montonio sends `payment_token` (or `order-token`) back with the
  notification and the donor's return. Its claims tell us which donation was
  paid (`merchant_reference`), for which merchant (`accessKey`) and how
  (`payment_status`).

Author: DSP Development Team
Date: 2025-10-02
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict

import jwt

from .exceptions import MalformedClaimError, TokenDecodeError

ALGORITHM = "HS256"
# Clock skew tolerated when validating `exp`/`iat` of inbound tokens.
DECODE_LEEWAY_SECONDS = 5 * 60
# Lifetime of outbound payment tokens.
TOKEN_LIFETIME_SECONDS = 10 * 60

REQUIRED_CLAIMS = ("accessKey", "merchant_reference", "payment_status")


@dataclass(frozen=True)
class PaymentTokenClaim:
    access_key: str
    merchant_reference: str
    payment_status: str
    payload: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PaymentTokenClaim":
        missing = [name for name in REQUIRED_CLAIMS if payload.get(name) is None]
        if missing:
            raise MalformedClaimError(missing, payload)
        return cls(
            access_key=str(payload["accessKey"]),
            merchant_reference=str(payload["merchant_reference"]),
            payment_status=str(payload["payment_status"]),
            payload=dict(payload),
        )


def decode_payment_token(token: str, secret_key: str) -> PaymentTokenClaim:
    """
    Verify and decode a Montonio payment token.

    Raises:
        TokenDecodeError: signature, format or expiry check failed.
        MalformedClaimError: a required claim is missing.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[ALGORITHM],
            leeway=DECODE_LEEWAY_SECONDS,
        )
    except jwt.PyJWTError as exc:
        raise TokenDecodeError(f"Could not decode payment token: {exc}") from exc

    if not isinstance(payload, dict):
        raise TokenDecodeError("Payment token payload is not an object")

    return PaymentTokenClaim.from_payload(payload)


def encode_payment_token(
    payment_data: Dict[str, Any], access_key: str, secret_key: str
) -> str:
    """
    Sign outbound payment data.

    Empty values are dropped, the access key and an expiry are added.
    """
    claims = {
        key: value
        for key, value in payment_data.items()
        if value not in (None, "", [], {})
    }
    claims["access_key"] = access_key
    claims["exp"] = int(time.time()) + TOKEN_LIFETIME_SECONDS
    return jwt.encode(claims, secret_key, algorithm=ALGORITHM)
