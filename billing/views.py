# billing/views.py
"""
Views for the billing application.

This module defines the payment endpoints: starting a card or
manual-transfer payment, the provider status sync, the registrant's
manual transfer notice, the Stripe webhook and the checkout session
verification fallback.
"""

import logging

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required
from camps.models import Camp
from monitoring.html_logger import error, info, warn
from registrations.models import Registration
from tennis_camp.api import ApiError, api_view, get_or_404, json_body, json_error
from .exceptions import (
    PaymentError,
    PaymentProviderError,
    PaymentRecordError,
    ReconciliationError,
    WebhookSignatureError,
)
from .gateways import get_payment_gateway
from .models import Payment
from .payments import start_payment
from .reconciliation import (
    handle_webhook_event,
    report_manual_transfer,
    sync_payment_intent,
    verify_checkout_session,
)

logger = logging.getLogger(__name__)


@method_decorator(api_view, name="dispatch")
class PaymentView(View):
    """
    Start a payment (POST) or sync a provider intent status (PUT).
    """

    http_method_names = ["post", "put"]

    def post(self, request, camp_id):
        """
        Start a payment for a registration of ``camp_id``.

        Body: ``{registration_id, payment_method, payment_type}``.

        Returns
        -------
        JsonResponse
            Card: ``{session_id, url, payment_id}``. Manual transfer:
            ``{payment_id, requires_manual_verification, transfer_url}``.
        """
        data = json_body(request)
        registration_id = data.get("registration_id")
        method = data.get("payment_method")
        payment_type = data.get("payment_type")
        if not registration_id or not method or not payment_type:
            return json_error("Missing required fields")

        get_or_404(Camp, "Camp not found", pk=camp_id)
        registration = get_or_404(
            Registration.objects.select_related("camp").prefetch_related("options"),
            "Registration not found",
            pk=registration_id,
            camp_id=camp_id,
        )

        try:
            started = start_payment(registration, method, payment_type)
        except PaymentError as exc:
            warn(f"Payment refused registration={registration.pk}: {exc}")
            return json_error(str(exc))
        except PaymentProviderError as exc:
            error(f"Payment provider error registration={registration.pk}: {exc}")
            return json_error("Payment provider error", 502)
        except PaymentRecordError as exc:
            return json_error(str(exc), 500)

        return JsonResponse(started.as_dict())

    @method_decorator(admin_required)
    def put(self, request, camp_id):
        """
        Reconcile a payment from a provider intent status.

        Body: ``{payment_intent_id, status}``; ``succeeded`` completes
        the payment and confirms the registration, anything else fails
        the payment.
        """
        data = json_body(request)
        intent_id = data.get("payment_intent_id")
        if not intent_id:
            return json_error("Missing payment_intent_id")

        payment = get_or_404(
            Payment.objects.select_related("registration"),
            "Payment not found",
            provider_payment_intent_id=intent_id,
            registration__camp_id=camp_id,
        )
        sync_payment_intent(payment, data.get("status") or "")
        return JsonResponse({"success": True, "payment": payment.as_dict()})


@require_POST
@api_view
def manual_transfer_view(request, camp_id):
    """
    Registrant reports a manual transfer as sent.

    Body: ``{payment_id}``. The payment must be a manual transfer of a
    registration of ``camp_id``.
    """
    data = json_body(request)
    payment_id = data.get("payment_id")
    if not payment_id:
        return json_error("Missing payment_id")

    payment = get_or_404(
        Payment.objects.select_related("registration"),
        "Payment not found",
        pk=payment_id,
        method=Payment.Method.MANUAL_TRANSFER,
        registration__camp_id=camp_id,
    )
    report_manual_transfer(payment)
    return JsonResponse(
        {
            "success": True,
            "message": "Payment verification submitted. Admin will confirm shortly.",
        }
    )


@csrf_exempt
@require_POST
@api_view
def stripe_webhook(request):
    """
    Receive a signed provider webhook.

    Unauthenticated deliveries get a 400 and change nothing. Verified
    events are always acknowledged with ``{"received": true}``.
    """
    gateway = get_payment_gateway()
    try:
        event = gateway.parse_webhook(request.body, request.headers.get("Stripe-Signature"))
    except WebhookSignatureError as exc:
        warn(f"Webhook rejected: {exc}")
        return json_error(str(exc))

    outcome = handle_webhook_event(event)
    info(f"Webhook {event.get('type')} {outcome}.")
    return JsonResponse({"received": True})


@require_POST
@api_view
def verify_session(request):
    """
    Verify a checkout session with the provider and reconcile it.

    Body: ``{session_id}``.
    """
    data = json_body(request)
    session_id = data.get("session_id")
    if not session_id:
        return json_error("session_id is required")

    try:
        result = verify_checkout_session(session_id)
    except ReconciliationError as exc:
        raise ApiError(str(exc))
    except PaymentProviderError as exc:
        error(f"Session verification failed session={session_id}: {exc}")
        return json_error("Failed to verify session", 502)
    return JsonResponse(result)
