# registrations/lifecycle.py
"""
Registration lifecycle.

Every status change of a registration goes through one of the named
transitions below::

    pending ──submit_manual_payment──▶ awaiting_manual_verification
    pending ──confirm_card_payment───▶ confirmed
    awaiting_manual_verification ──confirm_manual_payment──▶ confirmed
    pending | awaiting | confirmed ──cancel──▶ cancelled

A transition is applied with a single conditional ``UPDATE`` (status
must still be one of the allowed sources), so two requests racing on
the same row cannot both move it. Idempotent transitions treat a row
already in the target status as success; the others report it as a
conflict.
"""

import logging
from dataclasses import dataclass

from django.utils import timezone

from .exceptions import InvalidTransitionError
from .models import Registration

logger = logging.getLogger(__name__)

Status = Registration.Status


@dataclass(frozen=True)
class Transition:
    """
    A named, allowed status change.

    Attributes
    ----------
    name : str
        Identifier used in logs.
    sources : frozenset
        Statuses the registration may be in.
    target : str
        Status after the transition.
    idempotent : bool
        Whether a registration already in ``target`` is accepted
        silently.
    verb : str
        Past participle used in error messages ("confirmed").
    hint : str
        Extra explanation appended to the error message.
    """

    name: str
    sources: frozenset
    target: str
    idempotent: bool
    verb: str
    hint: str = ""

    def error_message(self, current: str) -> str:
        msg = f'Registration cannot be {self.verb} from status "{current}".'
        if self.hint:
            msg = f"{msg} {self.hint}"
        return msg


#: Registrant chose a manual bank transfer; staff must verify receipt.
SUBMIT_MANUAL_PAYMENT = Transition(
    name="submit_manual_payment",
    sources=frozenset({Status.PENDING}),
    target=Status.AWAITING_MANUAL_VERIFICATION,
    idempotent=True,
    verb="moved to manual verification",
)

#: The card provider reported the checkout as paid.
CONFIRM_CARD_PAYMENT = Transition(
    name="confirm_card_payment",
    sources=frozenset({Status.PENDING, Status.AWAITING_MANUAL_VERIFICATION}),
    target=Status.CONFIRMED,
    idempotent=True,
    verb="confirmed",
)

#: Staff confirmed receipt of a manual transfer.
CONFIRM_MANUAL_PAYMENT = Transition(
    name="confirm_manual_payment",
    sources=frozenset({Status.AWAITING_MANUAL_VERIFICATION}),
    target=Status.CONFIRMED,
    idempotent=False,
    verb="confirmed",
    hint="Only registrations awaiting manual verification can be confirmed here.",
)

#: Staff cancelled the registration. No refund is issued.
CANCEL = Transition(
    name="cancel",
    sources=frozenset({Status.PENDING, Status.AWAITING_MANUAL_VERIFICATION, Status.CONFIRMED}),
    target=Status.CANCELLED,
    idempotent=False,
    verb="cancelled",
)


def apply(registration: Registration, transition: Transition) -> bool:
    """
    Apply ``transition`` to ``registration``.

    Parameters
    ----------
    registration : Registration
        The registration to move. Its ``status`` attribute is
        refreshed to the stored value.
    transition : Transition
        One of the module-level transitions.

    Returns
    -------
    bool
        True if the row changed, False if it was already in the
        target status and the transition is idempotent.

    Raises
    ------
    InvalidTransitionError
        If the stored status is not an allowed source.
    """
    now = timezone.now()
    updated = Registration.objects.filter(
        pk=registration.pk, status__in=transition.sources
    ).update(status=transition.target, updated_at=now)

    if updated:
        logger.info(
            "Registration %s: %s -> %s", registration.pk, transition.name, transition.target
        )
        registration.status = transition.target
        registration.updated_at = now
        return True

    registration.refresh_from_db(fields=["status", "updated_at"])
    if transition.idempotent and registration.status == transition.target:
        return False
    raise InvalidTransitionError(
        transition.error_message(registration.status),
        current=registration.status,
        target=transition.target,
    )
