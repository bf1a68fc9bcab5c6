# billing/reconciliation.py
"""
Payment reconciliation.

Three triggers confirm payments: the provider webhook, the
registrant's browser asking us to verify a checkout session, and a
staff member confirming a manual transfer. They all end in the same
two steps, each safe to repeat:

1. the payment goes from ``pending`` to ``completed`` (or ``failed``)
   through a conditional update, so it never moves backwards;
2. the registration is moved through :mod:`registrations.lifecycle`.

The steps are not wrapped in one transaction. A payment that is
completed while its registration is not yet confirmed is a valid,
observable intermediate state; replaying the trigger finishes it.
"""

import logging

from django.utils import timezone

from monitoring.html_logger import error, info, warn
from registrations import lifecycle
from registrations.availability import check_availability
from registrations.exceptions import InvalidTransitionError
from registrations.models import Registration
from .exceptions import ReconciliationError
from .gateways import PaymentGateway, get_payment_gateway
from .models import Payment

logger = logging.getLogger(__name__)

#: Stripe event type acted upon; every other type is acknowledged only
CHECKOUT_COMPLETED = "checkout.session.completed"

#: Registration statuses from which a transfer notice moves the
#: registration to manual verification
_MANUAL_SUBMIT_STATUSES = {
    Registration.Status.PENDING,
    Registration.Status.AWAITING_MANUAL_VERIFICATION,
}


def _complete_payment(payment: Payment, *, payment_intent_id: str | None = None) -> bool:
    """Mark a pending payment completed. Returns False if it was not pending."""
    values = {"status": Payment.Status.COMPLETED, "completed_at": timezone.now()}
    if payment_intent_id:
        values["provider_payment_intent_id"] = payment_intent_id
    updated = Payment.objects.filter(
        pk=payment.pk, status=Payment.Status.PENDING
    ).update(**values)
    payment.refresh_from_db()
    return bool(updated)


def _fail_payment(payment: Payment) -> bool:
    updated = Payment.objects.filter(
        pk=payment.pk, status=Payment.Status.PENDING
    ).update(status=Payment.Status.FAILED)
    payment.refresh_from_db()
    return bool(updated)


def warn_if_over_capacity(camp) -> None:
    """Log when confirmations pushed a camp past its capacity."""
    availability = check_availability(camp)
    if availability.confirmed_count > availability.max_players:
        warn(
            f"Camp camp={camp.pk} is over capacity: "
            f"{availability.confirmed_count}/{availability.max_players} confirmed."
        )


def _confirm_by_card(registration: Registration) -> bool:
    """
    Confirm a registration after a card payment completed.

    A cancelled registration stays cancelled; the paid card payment is
    reported for staff follow-up.
    """
    try:
        changed = lifecycle.apply(registration, lifecycle.CONFIRM_CARD_PAYMENT)
    except InvalidTransitionError as exc:
        error(
            f"Card payment completed for registration={registration.pk} "
            f"in status {exc.current}; registration left unchanged."
        )
        return False
    if changed:
        info(f"Registration confirmed by card registration={registration.pk}.")
        warn_if_over_capacity(registration.camp)
    return changed


def confirm_checkout_session(
    session_id: str,
    *,
    registration_id=None,
    payment_intent_id: str | None = None,
) -> Payment | None:
    """
    Complete the payment of a paid checkout session and confirm its
    registration.

    Safe to call any number of times for the same session.

    Parameters
    ----------
    session_id : str
        Provider checkout session identifier.
    registration_id : optional
        Registration named in the session metadata. The payment row is
        authoritative; a mismatch is only logged.
    payment_intent_id : str, optional
        Provider payment intent, stored on the payment.

    Returns
    -------
    Payment or None
        The payment, or None if no payment row matches the session.
    """
    payment = (
        Payment.objects.select_related("registration__camp")
        .filter(provider_session_id=session_id)
        .first()
    )
    if payment is None:
        warn(f"No payment recorded for checkout session {session_id}.")
        return None

    if registration_id is not None and str(registration_id) != str(payment.registration_id):
        warn(
            f"Checkout session {session_id} names registration={registration_id} "
            f"but belongs to registration={payment.registration_id}."
        )

    if _complete_payment(payment, payment_intent_id=payment_intent_id):
        info(f"Payment completed payment={payment.pk} session={session_id}.")
    _confirm_by_card(payment.registration)
    return payment


def handle_webhook_event(event: dict) -> str:
    """
    Act on a verified provider webhook event.

    Returns
    -------
    str
        ``processed``, ``ignored`` or ``unknown_session``. Every
        outcome is acknowledged to the provider.
    """
    event_type = event.get("type")
    if event_type != CHECKOUT_COMPLETED:
        logger.info("Ignoring webhook event %s", event_type)
        return "ignored"

    session = (event.get("data") or {}).get("object") or {}
    session_id = session.get("id")
    payment_status = session.get("payment_status")
    if payment_status is not None and payment_status != "paid":
        info(f"Checkout session {session_id} completed unpaid ({payment_status}).")
        return "ignored"

    registration_id = (session.get("metadata") or {}).get("registration_id")
    if not session_id or not registration_id:
        error(f"Webhook for session {session_id} has no registration_id in metadata.")
        return "ignored"

    intent = session.get("payment_intent")
    if isinstance(intent, dict):
        intent = intent.get("id")
    payment = confirm_checkout_session(
        session_id, registration_id=registration_id, payment_intent_id=intent
    )
    return "processed" if payment is not None else "unknown_session"


def verify_checkout_session(session_id: str, *, gateway: PaymentGateway | None = None) -> dict:
    """
    Ask the provider for a session's state and reconcile it if paid.

    Fallback for a missed webhook, called when the registrant lands on
    the confirmation page.

    Returns
    -------
    dict
        ``{"paid": False}`` when unpaid, otherwise
        ``{"paid": True, "updated": bool}``; ``updated`` tells whether a
        payment row matched the session.

    Raises
    ------
    ReconciliationError
        If a paid session carries no registration reference.
    PaymentProviderError
        If the provider cannot be reached.
    """
    gw = gateway or get_payment_gateway()
    session = gw.retrieve_checkout_session(session_id)
    if not session.paid:
        return {"paid": False, "message": "Payment not completed"}

    registration_id = session.metadata.get("registration_id")
    if not registration_id:
        raise ReconciliationError("No registration_id in session metadata")

    payment = confirm_checkout_session(
        session.id,
        registration_id=registration_id,
        payment_intent_id=session.payment_intent_id,
    )
    return {"paid": True, "updated": payment is not None}


def sync_payment_intent(payment: Payment, status: str) -> Payment:
    """
    Apply a payment intent status reported by the provider.

    ``succeeded`` completes the payment and confirms the registration;
    any other status fails a still-pending payment.
    """
    if status == "succeeded":
        if _complete_payment(payment):
            info(f"Payment completed by intent sync payment={payment.pk}.")
        _confirm_by_card(payment.registration)
    elif _fail_payment(payment):
        warn(f"Payment failed payment={payment.pk} intent status={status}.")
    return payment


def confirm_manual_payment(registration: Registration) -> Registration:
    """
    Staff confirmation that a manual transfer was received.

    Only valid from ``awaiting_manual_verification``. The pending
    manual-transfer payments of the registration are completed.

    Raises
    ------
    InvalidTransitionError
        If the registration is in any other status; nothing changes.
    """
    lifecycle.apply(registration, lifecycle.CONFIRM_MANUAL_PAYMENT)
    completed = Payment.objects.filter(
        registration=registration,
        method=Payment.Method.MANUAL_TRANSFER,
        status=Payment.Status.PENDING,
    ).update(status=Payment.Status.COMPLETED, completed_at=timezone.now())
    info(
        f"Manual payment confirmed registration={registration.pk} "
        f"payments_completed={completed}."
    )
    warn_if_over_capacity(registration.camp)
    return registration


def confirm_manual_transfer(payment: Payment) -> Payment:
    """
    Staff confirmation that one manual transfer was received.

    A registration awaiting verification is confirmed as with
    :func:`confirm_manual_payment`. For an already confirmed
    registration (a balance paid after a deposit) only the payment is
    completed; the registration status is left alone.

    Raises
    ------
    ReconciliationError
        If the payment is not a pending manual transfer, or its
        registration is neither awaiting verification nor confirmed.
    """
    if payment.method != Payment.Method.MANUAL_TRANSFER:
        raise ReconciliationError("Only manual transfer payments can be confirmed here.")
    if payment.status != Payment.Status.PENDING:
        raise ReconciliationError(f'Payment cannot be confirmed from status "{payment.status}".')

    registration = payment.registration
    if registration.status == Registration.Status.AWAITING_MANUAL_VERIFICATION:
        confirm_manual_payment(registration)
        payment.refresh_from_db()
        return payment
    if registration.status != Registration.Status.CONFIRMED:
        raise ReconciliationError(
            f'Transfer cannot be confirmed for a registration in status "{registration.status}".'
        )

    if not _complete_payment(payment):
        raise ReconciliationError(f'Payment cannot be confirmed from status "{payment.status}".')
    info(
        f"Manual transfer confirmed payment={payment.pk} "
        f"registration={registration.pk} amount={payment.amount} {payment.currency}."
    )
    return payment


def cancel_registration(registration: Registration) -> Registration:
    """
    Cancel a registration. Payments are left as they are.

    Raises
    ------
    InvalidTransitionError
        If the registration is already cancelled.
    """
    lifecycle.apply(registration, lifecycle.CANCEL)
    info(f"Registration cancelled registration={registration.pk}.")
    return registration


def report_manual_transfer(payment: Payment) -> Payment:
    """
    Record that the registrant reports a manual transfer as sent.

    The payment stays pending until staff confirm receipt. A pending
    registration moves to manual verification.
    """
    Payment.objects.filter(pk=payment.pk, transfer_reported_at__isnull=True).update(
        transfer_reported_at=timezone.now()
    )
    payment.refresh_from_db()

    registration = payment.registration
    if registration.status in _MANUAL_SUBMIT_STATUSES:
        lifecycle.apply(registration, lifecycle.SUBMIT_MANUAL_PAYMENT)
    info(f"Manual transfer reported payment={payment.pk} registration={registration.pk}.")
    return payment
