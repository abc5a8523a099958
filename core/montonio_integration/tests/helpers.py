import time

import jwt

from core.montonio_integration.config import MontonioConfig

ACCESS_KEY = "k1"
SECRET_KEY = "montonio-test-secret-key-0123456789abcdef"

MONTONIO_TEST_SETTINGS = {
    "MONTONIO_ACCESS_KEY": ACCESS_KEY,
    "MONTONIO_SECRET_KEY": SECRET_KEY,
    "MONTONIO_SANDBOX_MODE": True,
    "MONTONIO_MERCHANT_NAME": "Donation",
    "MONTONIO_INCLUDE_DONATION_ID": True,
    "MONTONIO_INCLUDE_CAMPAIGN_NAME": False,
    "MONTONIO_INCLUDE_PERSONAL_CODE": True,
    "MONTONIO_DESCRIPTION_SEPARATOR": " / ",
    "SITE_URL": "https://donate.example.org",
    "DONATION_SUCCESS_URL": "https://donate.example.org/thanks/",
    "DONATION_FAILURE_URL": "https://donate.example.org/failed/",
}


def make_config(**overrides) -> MontonioConfig:
    values = dict(
        access_key=ACCESS_KEY,
        secret_key=SECRET_KEY,
        sandbox=True,
        merchant_name="Donation",
        include_donation_id=True,
        include_campaign_name=False,
        include_personal_code=True,
        description_separator=" / ",
        site_url="https://donate.example.org",
        success_url="https://donate.example.org/thanks/",
        failure_url="https://donate.example.org/failed/",
    )
    values.update(overrides)
    return MontonioConfig(**values)


def make_token(secret=SECRET_KEY, **claims) -> str:
    payload = {
        "accessKey": ACCESS_KEY,
        "merchant_reference": "42",
        "payment_status": "PAID",
        "exp": int(time.time()) + 600,
    }
    payload.update(claims)
    payload = {key: value for key, value in payload.items() if value is not None}
    return jwt.encode(payload, secret, algorithm="HS256")
