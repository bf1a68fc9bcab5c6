# registrations/views.py
"""
Views for the registrations application.

JSON endpoints used by the public registration form: camp
availability, creating and editing a registration, and reading it
back with its options and payments.
"""

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET

from camps.models import Camp
from monitoring.html_logger import warn
from tennis_camp.api import ApiError, api_view, get_or_404, json_body, json_error
from .availability import check_availability
from .exceptions import CampFullError, RegistrationLockedError
from .forms import REQUIRED_MESSAGE, RegistrationForm
from .models import Registration
from .writer import create_registration, update_registration


@require_GET
@ensure_csrf_cookie
@api_view
def availability_view(request, camp_id):
    """
    Report how many confirmed slots are left for a camp.

    Returns
    -------
    JsonResponse
        ``{isFull, availableSpots, confirmedCount, maxPlayers}``, or
        404 when the camp does not exist. Also sets the CSRF cookie
        the registration form posts back with.
    """
    camp = get_or_404(Camp, "Camp not found", pk=camp_id)
    return JsonResponse(check_availability(camp).as_dict())


def _validated_form(data) -> RegistrationForm:
    form = RegistrationForm(data=data)
    if not form.is_valid():
        raise ApiError(form.error_message(), fields=form.errors.get_json_data())
    return form


@method_decorator(api_view, name="dispatch")
class RegistrationView(View):
    """
    Create (POST) or edit (PATCH) a registration for a camp.

    Both methods take the participant fields plus
    ``optional_activities``, a list of add-on types.
    """

    http_method_names = ["post", "patch"]

    def post(self, request, camp_id):
        """
        Create a pending registration.

        Returns 400 with ``redirectTo: "waitlist"`` when the camp is
        already full of confirmed registrations.
        """
        data = json_body(request)
        form = _validated_form(data)
        camp = get_or_404(Camp, "Camp not found", pk=camp_id)

        try:
            registration = create_registration(
                camp,
                form.participant_fields,
                form.cleaned_data["optional_activities"],
            )
        except CampFullError:
            return json_error("Camp is full", 400, redirectTo="waitlist")

        return JsonResponse({"registration": registration.as_dict(), "success": True})

    def patch(self, request, camp_id):
        """
        Edit a pending registration and replace its add-ons.

        The registration is identified by ``registration_id`` in the
        body and must belong to ``camp_id``.
        """
        data = json_body(request)
        registration_id = data.get("registration_id")
        if not registration_id:
            return json_error(REQUIRED_MESSAGE)
        form = _validated_form(data)

        registration = get_or_404(
            Registration, "Registration not found", pk=registration_id, camp_id=camp_id
        )
        try:
            update_registration(
                registration,
                form.participant_fields,
                form.cleaned_data["optional_activities"],
            )
        except RegistrationLockedError as exc:
            warn(f"Edit refused registration={registration.pk}: {exc}")
            return json_error(str(exc))

        return JsonResponse({"registration": registration.as_dict(), "success": True})


@require_GET
@api_view
def registration_detail(request, camp_id, registration_id):
    """Return a registration of ``camp_id`` with its options and payments."""
    registration = get_or_404(
        Registration.objects.prefetch_related("options", "payments"),
        "Registration not found",
        pk=registration_id,
        camp_id=camp_id,
    )
    return JsonResponse(registration.as_dict(related=True))
