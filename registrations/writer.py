# registrations/writer.py
"""
Registration writer.

Creates pending registrations and edits them before payment. The
capacity check and the insert happen inside one transaction that
holds a row lock on the camp, so concurrent submissions for the same
camp are serialized on databases that support ``SELECT ... FOR
UPDATE``. Add-on rows are written best-effort: a failure there is
logged and does not fail the registration.
"""

import logging
from typing import Iterable

from django.db import DatabaseError, transaction

from camps.models import Camp
from monitoring.html_logger import info, warn
from .availability import check_availability
from .exceptions import CampFullError, RegistrationLockedError
from .models import Registration, RegistrationOption
from .pricing import option_price

logger = logging.getLogger(__name__)

#: Fields a registrant may change before paying
EDITABLE_FIELDS = (
    "name",
    "email",
    "whatsapp_number",
    "tennis_experience_years",
    "play_frequency_per_month",
    "bedroom_type",
    "accepted_cancellation_policy",
)

#: Payment statuses that freeze the price of a registration
PRICE_LOCKING_PAYMENT_STATUSES = ("pending", "completed")


def _insert_options(registration: Registration, option_types: Iterable[str]) -> list:
    """
    Store the add-ons of a registration, priced from the fixed table.

    Runs in its own savepoint; a database failure is logged and an
    empty list is returned.
    """
    rows = [
        RegistrationOption(
            registration=registration,
            option_type=option_type,
            price=option_price(option_type),
        )
        for option_type in option_types
    ]
    if not rows:
        return []
    try:
        with transaction.atomic():
            return RegistrationOption.objects.bulk_create(rows)
    except DatabaseError as exc:
        logger.exception("Storing options failed for registration %s", registration.pk)
        warn(f"Options not stored for registration={registration.pk}: {exc!r}")
        return []


def create_registration(
    camp: Camp, fields: dict, option_types: Iterable[str] = ()
) -> Registration:
    """
    Create a pending registration for ``camp``.

    Parameters
    ----------
    camp : Camp
        The camp applied for.
    fields : dict
        Participant fields (see :data:`EDITABLE_FIELDS`). A ``status``
        key is ignored: new registrations always start pending.
    option_types : iterable of str
        Add-on types to attach.

    Returns
    -------
    Registration
        The stored registration.

    Raises
    ------
    CampFullError
        If the camp's confirmed registrations already fill it.
    """
    values = {name: fields[name] for name in EDITABLE_FIELDS if name in fields}

    with transaction.atomic():
        # Serializes writers per camp; a no-op on SQLite
        Camp.objects.select_for_update().filter(pk=camp.pk).first()
        availability = check_availability(camp)
        if availability.is_full:
            warn(
                f"Registration rejected, camp={camp.pk} is full "
                f"({availability.confirmed_count}/{availability.max_players})."
            )
            raise CampFullError(availability)
        registration = Registration.objects.create(
            camp=camp, status=Registration.Status.PENDING, **values
        )

    _insert_options(registration, option_types)
    info(f"Registration created registration={registration.pk} camp={camp.pk}.")
    return registration


def update_registration(
    registration: Registration, fields: dict, option_types: Iterable[str] = ()
) -> Registration:
    """
    Edit a registration before payment.

    Mutable participant fields are overwritten and the add-on set is
    fully replaced (delete all, insert new). The status is never
    taken from ``fields``.

    Raises
    ------
    RegistrationLockedError
        If the registration is no longer pending, or a payment was
        started for it (the amount due is fixed from then on).
    """
    with transaction.atomic():
        # Payments are started under the same row lock
        current = Registration.objects.select_for_update().get(pk=registration.pk)
        if current.status != Registration.Status.PENDING:
            raise RegistrationLockedError(
                f'Registration can no longer be edited (status "{current.status}").'
            )
        if current.payments.filter(status__in=PRICE_LOCKING_PAYMENT_STATUSES).exists():
            raise RegistrationLockedError(
                "Registration can no longer be edited: a payment was already started."
            )

        changed = []
        for name in EDITABLE_FIELDS:
            if name in fields:
                setattr(registration, name, fields[name])
                changed.append(name)
        registration.save(update_fields=changed + ["updated_at"])

        registration.options.all().delete()
        _insert_options(registration, option_types)
    info(f"Registration updated registration={registration.pk}.")
    return registration
