"""
Donation Views (core.donations)
===============================

Endpoints
---------

1. gateway_listener
   - URL: /?give-listener=<gateway>
   - Method: GET / POST
   - Auth: None (called by payment providers and returning donors)
   - Purpose:
       Routes a gateway callback to the listener registered for the
       `give-listener` discriminator. Unknown gateways answer 404.

2. GatewayListView
   - URL: /api/donations/forms/<form_id>/gateways/
   - Method: GET
   - Auth: None
   - Purpose:
       Lists the payment options of a donation form together with the
       rendered form snippet of each gateway.

Author: DSP Development Team
Date: 2025-10-02
"""

import logging

from django.http import Http404
from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import csrf_exempt
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .gateways import get_gateway, get_gateways
from .models import DonationForm

logger = logging.getLogger(__name__)

LISTENER_PARAM = "give-listener"


@csrf_exempt
def gateway_listener(request):
    key = request.GET.get(LISTENER_PARAM)
    gateway = get_gateway(key)
    if gateway is None or gateway.listener is None:
        logger.debug("No gateway listener for %r", key)
        raise Http404("Unknown payment listener.")
    return gateway.listener(request)


class GatewayListView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, form_id):
        form = get_object_or_404(DonationForm, pk=form_id, is_active=True)

        data = []
        for gateway in get_gateways():
            data.append({
                "id": gateway.key,
                "label": str(gateway.checkout_label),
                "form_html": gateway.form_output(form) if gateway.form_output else "",
            })

        return Response({"form_id": form.pk, "gateways": data}, status=200)
