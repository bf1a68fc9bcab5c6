# billing/payments.py
"""
Payment initiator.

Starts a payment for a registration: the amount is priced from the
registration, then either a hosted card checkout session is created
at the provider, or a manual bank transfer is recorded and the
registration moves to manual verification.
"""

from dataclasses import dataclass
import logging

from django.conf import settings
from django.db import DatabaseError, transaction

from monitoring.html_logger import error, info
from registrations import lifecycle
from registrations.exceptions import PricingError
from registrations.models import Registration
from registrations.pricing import price_registration
from .exceptions import PaymentError, PaymentRecordError
from .gateways import PaymentGateway, get_payment_gateway
from .models import Payment

logger = logging.getLogger(__name__)

#: Accepted spellings of each payment method
METHOD_ALIASES = {
    "card": Payment.Method.CARD,
    "stripe": Payment.Method.CARD,
    "manual_transfer": Payment.Method.MANUAL_TRANSFER,
    "revolut": Payment.Method.MANUAL_TRANSFER,
}

#: Registration statuses from which a manual transfer moves the
#: registration to manual verification
_MANUAL_SUBMIT_STATUSES = {
    Registration.Status.PENDING,
    Registration.Status.AWAITING_MANUAL_VERIFICATION,
}


@dataclass
class PaymentStart:
    """
    Result of starting a payment.

    Attributes
    ----------
    payment : Payment
        The pending payment row.
    redirect_url : str, optional
        Hosted checkout page (card only).
    manual_verification_required : bool
        True for a manual transfer.
    """

    payment: Payment
    redirect_url: str | None = None
    manual_verification_required: bool = False

    def as_dict(self) -> dict:
        if self.payment.method == Payment.Method.CARD:
            return {
                "session_id": self.payment.provider_session_id,
                "url": self.redirect_url,
                "payment_id": self.payment.pk,
            }
        return {
            "payment_id": self.payment.pk,
            "requires_manual_verification": self.manual_verification_required,
            "transfer_url": getattr(settings, "MANUAL_TRANSFER_URL", ""),
        }


def normalize_method(method) -> str:
    """
    Map an accepted payment method spelling to a :class:`Payment.Method`.

    Raises
    ------
    PaymentError
        If the method is unknown.
    """
    try:
        return METHOD_ALIASES[method]
    except (KeyError, TypeError):
        raise PaymentError("Invalid payment method")


def _checkout_urls(registration: Registration) -> tuple:
    base = getattr(settings, "APP_BASE_URL", "http://localhost:8000").rstrip("/")
    camp_id = registration.camp_id
    success = (
        f"{base}/register/{camp_id}/confirmation?payment_method=card"
        f"&session_id={{CHECKOUT_SESSION_ID}}&registration_id={registration.pk}"
    )
    cancel = f"{base}/register/{camp_id}/payment?registration_id={registration.pk}"
    return success, cancel


def start_payment(
    registration: Registration,
    method: str,
    payment_type: str,
    *,
    gateway: PaymentGateway | None = None,
) -> PaymentStart:
    """
    Start a card or manual-transfer payment for ``registration``.

    Parameters
    ----------
    registration : Registration
        The registration to pay for.
    method : str
        ``card`` or ``manual_transfer`` (``stripe`` and ``revolut``
        are accepted aliases).
    payment_type : str
        ``deposit`` (fixed amount) or ``full`` (priced total).
    gateway : PaymentGateway, optional
        Card gateway; defaults to :func:`get_payment_gateway`.

    Returns
    -------
    PaymentStart
        The pending payment and what the caller needs next.

    Raises
    ------
    PaymentError
        For an unknown method or type, or a cancelled registration.
    PaymentProviderError
        If the card provider rejects the checkout session.
    PaymentRecordError
        If the payment row cannot be stored.
    """
    method = normalize_method(method)

    with transaction.atomic():
        # Row lock shared with registration edits: the price read here
        # is the one charged
        Registration.objects.select_for_update().filter(pk=registration.pk).first()
        registration.refresh_from_db(fields=["status", "bedroom_type", "updated_at"])
        if registration.status == Registration.Status.CANCELLED:
            raise PaymentError(f'Registration cannot be paid (status "{registration.status}").')

        breakdown = price_registration(registration)
        try:
            amount = breakdown.amount_due(payment_type)
        except PricingError:
            raise PaymentError("Invalid payment type")

        values = dict(
            registration=registration,
            method=method,
            payment_type=payment_type,
            amount=amount,
            currency=getattr(settings, "PAYMENT_CURRENCY", "gbp"),
            base_camp_price=breakdown.base_price,
            bedroom_upgrade_price=breakdown.bedroom_upgrade,
            options_total_price=breakdown.options_total,
        )

        if method == Payment.Method.CARD:
            return _start_card_payment(registration, values, breakdown, gateway)
        return _start_manual_payment(registration, values)


def _start_card_payment(registration, values, breakdown, gateway) -> PaymentStart:
    gw = gateway or get_payment_gateway()
    payment_type = values["payment_type"]
    label = "Deposit" if payment_type == Payment.Type.DEPOSIT else "Full Payment"
    success_url, cancel_url = _checkout_urls(registration)

    session = gw.create_checkout_session(
        amount=values["amount"],
        currency=values["currency"],
        name=f"Tennis Camp Marrakech - {label}",
        description=(
            f"Registration for tennis camp in Marrakech from "
            f"{registration.camp.date_range_label}"
        ),
        metadata={
            "registration_id": registration.pk,
            "camp_id": registration.camp_id,
            "payment_type": payment_type,
            "base_camp_price": breakdown.base_price,
            "bedroom_upgrade_price": breakdown.bedroom_upgrade,
            "options_total_price": breakdown.options_total,
        },
        success_url=success_url,
        cancel_url=cancel_url,
    )

    try:
        payment = Payment.objects.create(provider_session_id=session.id, **values)
    except DatabaseError as exc:
        logger.exception("Storing card payment failed for registration %s", registration.pk)
        error(
            f"Orphaned checkout session {session.id} for registration="
            f"{registration.pk}: payment row not stored ({exc!r})."
        )
        raise PaymentRecordError("Failed to create payment record") from exc

    info(
        f"Card payment started payment={payment.pk} registration={registration.pk} "
        f"amount={payment.amount} {payment.currency}."
    )
    return PaymentStart(payment=payment, redirect_url=session.url)


def _start_manual_payment(registration, values) -> PaymentStart:
    try:
        payment = Payment.objects.create(**values)
    except DatabaseError as exc:
        logger.exception("Storing manual payment failed for registration %s", registration.pk)
        raise PaymentRecordError("Failed to create payment record") from exc

    # A balance transfer on a confirmed registration keeps it confirmed
    if registration.status in _MANUAL_SUBMIT_STATUSES:
        lifecycle.apply(registration, lifecycle.SUBMIT_MANUAL_PAYMENT)

    info(
        f"Manual transfer started payment={payment.pk} registration={registration.pk} "
        f"amount={payment.amount} {payment.currency}."
    )
    return PaymentStart(payment=payment, manual_verification_required=True)
