"""
Montonio Integration Views (core.montonio_integration)
======================================================

Endpoints
---------

1. MontonioListenerView
   - URL: /?give-listener=montonio&id=<donation>&give-form-id=<form>&payment_token=<jwt>
     (dispatched by `core.donations.views.gateway_listener`)
   - Method: GET / POST
   - Auth: None
   - Purpose:
       Receives Montonio's notification and the donor's return, verifies the
       payment token and marks the donation paid or abandoned. Answers 200
       with a `Location` header naming the success or failure page. Query
       parameters are read even when the body cannot be parsed. Rejected
       callbacks get a bare 400.

2. MontonioCheckoutView
   - URL: /api/payments/montonio/checkout/
   - Method: POST
   - Body: {"form_id": 1, "amount": "25.00", "email": "...", ...}
   - Purpose:
       Records a pending donation and redirects the donor to the Montonio
       payment page.

3. MontonioConfigView
   - URL: /api/payments/montonio/config/
   - Method: GET
   - Auth: None
   - Purpose:
       Returns public gateway information for the frontend (never the keys).

Dependencies
------------
- Django REST Framework (API endpoints)
- PyJWT (payment tokens, see tokens.py)

Author: DSP Development Team
Date: 2025-10-02
"""

import logging

from django.db import DatabaseError
from django.http import HttpResponse, HttpResponseRedirect
from django.utils.translation import get_language
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.donations.ledger import DonationLedger, insert_payment
from core.donations.models import Donation

from .config import get_config
from .exceptions import MontonioCallbackError
from .gateway import (
    GATEWAY_KEY,
    GATEWAY_LABEL,
    build_payment_data,
    get_payment_url,
    resolve_locale,
)
from .serializers import DonationSubmissionSerializer
from .verifier import CallbackParams, describe_request, verify_callback

logger = logging.getLogger(__name__)


def _request_params(request):
    """Query parameters overlaid with body parameters (body wins)."""
    params = request.query_params.dict()
    try:
        data = request.data
    except (ParseError, UnsupportedMediaType) as exc:
        # unreadable bodies are ignored; the query string still counts
        logger.warning("Montonio - ignoring unreadable callback body: %s", exc)
        return params
    if hasattr(data, "dict"):
        data = data.dict()
    if isinstance(data, dict):
        params.update(data)
    return params


class MontonioListenerView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return self._handle(request)

    def post(self, request):
        return self._handle(request)

    def _handle(self, request):
        data = _request_params(request)
        params = CallbackParams.from_data(data)

        try:
            outcome = verify_callback(params, get_config(), DonationLedger())
        except MontonioCallbackError as exc:
            logger.warning(
                "Montonio - Webhook Received: %s (%s, request=%s)",
                exc.message,
                exc.error_code,
                describe_request(data, params),
            )
            return HttpResponse(status=status.HTTP_400_BAD_REQUEST)

        response = HttpResponse(status=status.HTTP_200_OK)
        response["Location"] = outcome.redirect_url
        return response


class MontonioCheckoutView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = DonationSubmissionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        config = get_config()
        data = serializer.validated_data
        form = data["form"]

        try:
            donation = insert_payment(
                form=form,
                price_id=data["price_id"],
                amount=data["amount"],
                currency=form.currency,
                email=data["email"],
                first_name=data["first_name"],
                last_name=data["last_name"],
                gateway=GATEWAY_KEY,
                status=Donation.STATUS_PENDING,
            )
        except DatabaseError:
            logger.exception("Montonio Error: unable to create a pending donation.")
            return Response(
                {"detail": "Unable to create a pending donation."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        campaign_name = form.title if config.include_campaign_name else ""
        personal_code = ""
        if config.include_personal_code and data["personal_code"].strip():
            personal_code = data["personal_code"].strip()
            DonationLedger().update_meta(donation.pk, personal_code=personal_code)

        payment_data = build_payment_data(
            config,
            donation,
            locale=resolve_locale(get_language()),
            campaign_name=campaign_name,
            personal_code=personal_code,
        )
        payment_url = get_payment_url(config, payment_data)

        logger.info(
            "Redirecting donation %s to Montonio (%s).", donation.pk, config.environment
        )
        return HttpResponseRedirect(payment_url)


class MontonioConfigView(APIView):
    """
    endpoint so the frontend can show the Montonio option
    """
    permission_classes = [AllowAny]

    def get(self, request):
        config = get_config()
        return Response(
            {
                "gateway": GATEWAY_KEY,
                "label": str(GATEWAY_LABEL),
                "environment": config.environment,
                "merchantName": config.merchant_name,
            },
            status=200,
        )
