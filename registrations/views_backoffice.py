# registrations/views_backoffice.py
"""
Back-office views for registrations.

Admin-only JSON endpoints: the list of registrations waiting for a
manual transfer to be checked, the confirm and cancel actions, and the
confirmation of a single transfer.
"""

from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from accounts.decorators import admin_required
from billing.exceptions import ReconciliationError
from billing.models import Payment
from billing.reconciliation import (
    cancel_registration,
    confirm_manual_payment,
    confirm_manual_transfer,
)
from monitoring.html_logger import warn
from tennis_camp.api import api_view, get_or_404, json_error
from .exceptions import InvalidTransitionError
from .models import Registration


@require_GET
@admin_required
@api_view
def backoffice_registrations(request):
    """
    List registrations in a given status, newest first.

    Query parameters
    ----------------
    status : str, optional
        Defaults to ``awaiting_manual_verification``.

    Returns
    -------
    JsonResponse
        ``{"registrations": [...]}``, each with its camp dates and
        payments.
    """
    status = request.GET.get("status") or Registration.Status.AWAITING_MANUAL_VERIFICATION
    if status not in Registration.Status.values:
        return json_error(f'Unknown status "{status}"')

    registrations = (
        Registration.objects.filter(status=status)
        .select_related("camp")
        .prefetch_related("options", "payments")
    )
    data = []
    for registration in registrations:
        item = registration.as_dict(related=True)
        item["camp"] = {
            "id": registration.camp_id,
            "start_date": registration.camp.start_date,
            "end_date": registration.camp.end_date,
        }
        data.append(item)
    return JsonResponse({"registrations": data})


def _transition_view(request, registration_id, action):
    registration = get_or_404(
        Registration.objects.select_related("camp"),
        "Registration not found",
        pk=registration_id,
    )
    try:
        action(registration)
    except InvalidTransitionError as exc:
        warn(f"Back-office action refused registration={registration.pk}: {exc}")
        return json_error(str(exc))
    return JsonResponse({"success": True, "registration": registration.as_dict()})


@require_POST
@admin_required
@api_view
def backoffice_confirm(request, registration_id):
    """
    Confirm a registration paid by manual transfer.

    Only registrations awaiting manual verification can be
    confirmed; any other status gives a 400 naming that status.
    """
    return _transition_view(request, registration_id, confirm_manual_payment)


@require_POST
@admin_required
@api_view
def backoffice_cancel(request, registration_id):
    """Cancel a registration. No refund is issued."""
    return _transition_view(request, registration_id, cancel_registration)


@require_POST
@admin_required
@api_view
def backoffice_payment_confirm(request, payment_id):
    """
    Confirm receipt of one manual transfer.

    Used for a balance paid by transfer on a registration that is
    already confirmed; the registration status is not changed then.
    """
    payment = get_or_404(
        Payment.objects.select_related("registration"), "Payment not found", pk=payment_id
    )
    try:
        confirm_manual_transfer(payment)
    except ReconciliationError as exc:
        warn(f"Transfer confirmation refused payment={payment.pk}: {exc}")
        return json_error(str(exc))
    return JsonResponse({"success": True, "payment": payment.as_dict()})
