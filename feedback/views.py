# feedback/views.py
"""
Views for the feedback application.

JSON endpoints letting a logged-in player read, leave and update
their feedback on a camp.
"""

from django.db import IntegrityError, transaction
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.http import require_http_methods

from accounts.decorators import login_required_json
from camps.models import Camp
from monitoring.html_logger import info, warn
from tennis_camp.api import ApiError, api_view, get_or_404, json_body, json_error
from .forms import FeedbackForm
from .models import Feedback

DUPLICATE_MESSAGE = "Feedback already exists for this camp. Use PUT to update it."


def _validated_form(data, instance=None) -> FeedbackForm:
    form = FeedbackForm(data=data, instance=instance)
    if not form.is_valid():
        raise ApiError(form.error_message(), fields=form.errors.get_json_data())
    return form


@method_decorator(login_required_json, name="dispatch")
@method_decorator(api_view, name="dispatch")
class FeedbackView(View):
    """Read (GET) or leave (POST) the current player's feedback on a camp."""

    http_method_names = ["get", "post"]

    def get(self, request):
        """
        Return the current player's feedback for ``?camp=<id>``.

        ``feedback`` is null when none was left yet.
        """
        camp_id = request.GET.get("camp")
        if not camp_id or not camp_id.isdigit():
            return json_error("Camp ID is required")
        feedback = Feedback.objects.filter(player=request.user, camp_id=camp_id).first()
        return JsonResponse({"feedback": feedback.as_dict() if feedback else None})

    def post(self, request):
        """
        Leave feedback on the camp given by ``camp_id``.

        A player has at most one feedback per camp; a second one is
        refused and must be sent as an update.
        """
        data = json_body(request)
        camp_id = data.get("camp_id")
        if not camp_id:
            return json_error("Missing required fields")
        form = _validated_form(data)
        camp = get_or_404(Camp, "Camp not found", pk=camp_id)

        if Feedback.objects.filter(player=request.user, camp=camp).exists():
            return json_error(DUPLICATE_MESSAGE)

        feedback = form.save(commit=False)
        feedback.player = request.user
        feedback.camp = camp
        try:
            with transaction.atomic():
                feedback.save()
        except IntegrityError:
            # Lost a race with a concurrent POST for the same camp
            return json_error(DUPLICATE_MESSAGE)
        info(f"Feedback created feedback={feedback.pk} camp={camp.pk} player={request.user.pk}.")
        return JsonResponse({"feedback": feedback.as_dict()}, status=201)


@require_http_methods(["PUT"])
@login_required_json
@api_view
def feedback_detail(request, feedback_id):
    """Update one of the current player's feedbacks."""
    feedback = get_or_404(Feedback, "Feedback not found", pk=feedback_id)
    if feedback.player_id != request.user.pk:
        warn(f"Feedback update refused feedback={feedback.pk} user={request.user.pk}.")
        return json_error("Unauthorized", 403)

    form = _validated_form(json_body(request), instance=feedback)
    feedback = form.save()
    info(f"Feedback updated feedback={feedback.pk}.")
    return JsonResponse({"feedback": feedback.as_dict()})
