# billing/gateways.py
"""
Payment gateways for hosted card checkout.

This module defines abstractions and implementations for
card payment backends. Two gateways are provided:

- LocalPaymentGateway: pure Django, local-only simulation.
- StripeGateway: Stripe Checkout through the Stripe SDK.

Both verify webhooks with the Stripe signature scheme. A factory
function `get_payment_gateway` selects the gateway based on Django
settings.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol
import json
import logging
import uuid

import stripe
from django.conf import settings

from .exceptions import PaymentProviderError, WebhookSignatureError

logger = logging.getLogger(__name__)

#: Tolerance, in seconds, on the webhook signature timestamp
WEBHOOK_TOLERANCE = 300


@dataclass
class CheckoutSession:
    """
    Provider-independent view of a hosted checkout session.

    Attributes
    ----------
    id : str
        Session identifier at the provider.
    url : str
        Page the registrant is redirected to.
    payment_status : str
        ``paid`` once the provider captured the payment.
    metadata : dict
        Metadata attached when the session was created.
    payment_intent_id : str, optional
        Payment intent identifier, once known.
    """

    id: str
    url: str = ""
    payment_status: str = "unpaid"
    metadata: dict = field(default_factory=dict)
    payment_intent_id: str | None = None

    @property
    def paid(self) -> bool:
        return self.payment_status == "paid"


class PaymentGateway(Protocol):
    """
    Protocol for card payment gateways.

    Any gateway must create and retrieve hosted checkout sessions and
    authenticate webhook deliveries.
    """

    def create_checkout_session(
        self,
        *,
        amount,
        currency: str,
        name: str,
        description: str,
        metadata: dict,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """
        Create a hosted checkout session for one line item.

        Parameters
        ----------
        amount : Decimal
            Amount to charge, in major units (pounds).
        currency : str
            ISO currency code, lower case.
        name, description : str
            Line item label shown on the checkout page.
        metadata : dict
            String values attached to the session.
        success_url, cancel_url : str
            Where the provider sends the registrant afterwards.

        Returns
        -------
        CheckoutSession
            The created session.
        """
        ...

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        """Fetch the current state of a checkout session."""
        ...

    def parse_webhook(self, payload: bytes, signature: str | None) -> dict:
        """
        Authenticate a webhook delivery and decode its event.

        Raises
        ------
        WebhookSignatureError
            If the delivery cannot be authenticated.
        """
        ...


def to_minor_units(amount) -> int:
    """Convert an amount in pounds to pence, rounding half up."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def verify_webhook(payload: bytes, signature: str | None, secret: str | None) -> dict:
    """
    Check a Stripe-signed webhook and return the decoded event.

    Parameters
    ----------
    payload : bytes
        Raw request body, exactly as received.
    signature : str or None
        Value of the ``Stripe-Signature`` header.
    secret : str or None
        Shared webhook signing secret.

    Returns
    -------
    dict
        The event, with ``type`` and ``data.object`` keys.

    Raises
    ------
    WebhookSignatureError
        If the header or secret is missing, the signature does not
        match, or the payload is not a JSON object.
    """
    if not signature or not secret:
        raise WebhookSignatureError("Missing signature or webhook secret")
    try:
        text = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            text, signature, secret, tolerance=WEBHOOK_TOLERANCE
        )
        event = json.loads(text)
    except stripe.SignatureVerificationError as exc:
        raise WebhookSignatureError("Invalid signature") from exc
    except (UnicodeDecodeError, ValueError) as exc:
        raise WebhookSignatureError("Invalid payload") from exc
    if not isinstance(event, dict):
        raise WebhookSignatureError("Invalid payload")
    return event


# ---------------------------------------------------------------------------
# Local (pure Django) payment backend
# ---------------------------------------------------------------------------
@dataclass
class LocalPaymentGateway:
    """
    Local payment gateway implementation.

    Simulates hosted checkout without external services: every
    session reads back as paid, with the metadata of the payment row
    that recorded it.

    The redirect URL is the success URL itself.

    Attributes
    ----------
    webhook_secret : str, optional
        Secret used to verify simulated webhook deliveries.
    """

    webhook_secret: str | None = None

    def create_checkout_session(
        self, *, amount, currency, name, description, metadata, success_url, cancel_url
    ) -> CheckoutSession:
        session_id = f"cs_local_{uuid.uuid4().hex}"
        logger.info(
            "Local checkout session %s for %s %s (%s)", session_id, amount, currency, name
        )
        return CheckoutSession(
            id=session_id,
            url=success_url.replace("{CHECKOUT_SESSION_ID}", session_id),
            payment_status="unpaid",
            metadata=dict(metadata),
        )

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        from .models import Payment

        payment = Payment.objects.filter(provider_session_id=session_id).first()
        metadata = {}
        if payment is not None:
            metadata = {
                "registration_id": str(payment.registration_id),
                "camp_id": str(payment.registration.camp_id),
                "payment_type": payment.payment_type,
            }
        return CheckoutSession(id=session_id, payment_status="paid", metadata=metadata)

    def parse_webhook(self, payload: bytes, signature: str | None) -> dict:
        return verify_webhook(payload, signature, self.webhook_secret)


# ---------------------------------------------------------------------------
# Stripe-backed payment backend (remote API calls)
# ---------------------------------------------------------------------------
@dataclass
class StripeGateway:
    """
    Stripe Checkout gateway implementation.

    Attributes
    ----------
    api_key : str, optional
        Stripe secret key.
    webhook_secret : str, optional
        Signing secret of the webhook endpoint.
    """

    api_key: str | None = None
    webhook_secret: str | None = None

    def _require_key(self) -> str:
        """
        Ensure the secret key is configured.

        Raises
        ------
        PaymentProviderError
            If no secret key is configured.
        """
        if not self.api_key:
            raise PaymentProviderError("STRIPE_SECRET_KEY is not configured")
        return self.api_key

    @staticmethod
    def _session(obj) -> CheckoutSession:
        intent = getattr(obj, "payment_intent", None)
        if intent is not None and not isinstance(intent, str):
            intent = getattr(intent, "id", None)
        return CheckoutSession(
            id=obj.id,
            url=getattr(obj, "url", None) or "",
            payment_status=getattr(obj, "payment_status", None) or "unpaid",
            metadata=dict(getattr(obj, "metadata", None) or {}),
            payment_intent_id=intent,
        )

    def create_checkout_session(
        self, *, amount, currency, name, description, metadata, success_url, cancel_url
    ) -> CheckoutSession:
        """
        Create a Stripe Checkout session in ``payment`` mode.

        Raises
        ------
        PaymentProviderError
            If the key is missing or the Stripe API call fails.
        """
        api_key = self._require_key()
        try:
            session = stripe.checkout.Session.create(
                api_key=api_key,
                mode="payment",
                payment_method_types=["card"],
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "product_data": {"name": name, "description": description},
                            "unit_amount": to_minor_units(amount),
                        },
                        "quantity": 1,
                    }
                ],
                metadata={k: str(v) for k, v in metadata.items()},
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as exc:
            logger.exception("Stripe checkout session creation failed")
            raise PaymentProviderError("Failed to create checkout session") from exc
        return self._session(session)

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        """
        Fetch a Stripe Checkout session.

        Raises
        ------
        PaymentProviderError
            If the key is missing or the Stripe API call fails.
        """
        api_key = self._require_key()
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=api_key)
        except stripe.StripeError as exc:
            logger.exception("Stripe checkout session retrieval failed")
            raise PaymentProviderError("Failed to verify session") from exc
        return self._session(session)

    def parse_webhook(self, payload: bytes, signature: str | None) -> dict:
        return verify_webhook(payload, signature, self.webhook_secret)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------
def get_payment_gateway() -> PaymentGateway:
    """
    Factory to return the configured payment gateway.

    Returns
    -------
    PaymentGateway
        Either a StripeGateway or a LocalPaymentGateway instance
        depending on the PAYMENT_BACKEND setting.
    """
    backend = getattr(settings, "PAYMENT_BACKEND", "local")
    webhook_secret = getattr(settings, "STRIPE_WEBHOOK_SECRET", None)
    if backend == "stripe":
        return StripeGateway(
            api_key=getattr(settings, "STRIPE_SECRET_KEY", None),
            webhook_secret=webhook_secret,
        )
    return LocalPaymentGateway(webhook_secret=webhook_secret)
