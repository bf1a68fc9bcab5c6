# accounts/views.py
"""
Views for the accounts application.

Identity is a Django session: the client logs in once and every
later request is authenticated server-side from the session
cookie. These JSON views open and close that session and report
who the current user is.
"""

from django.contrib.auth import authenticate, login, logout
from django.views.decorators.http import require_GET, require_POST

from django.http import JsonResponse

from tennis_camp.api import api_view, json_body, json_error
from monitoring.html_logger import info, warn
from .decorators import login_required_json, is_admin


def _user_payload(user) -> dict:
    profile = getattr(user, "profile", None)
    return {
        "id": user.pk,
        "username": user.username,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": profile.role if profile else None,
        "is_admin": is_admin(user),
    }


@require_POST
@api_view
def login_view(request):
    """
    Open a session for the given credentials.

    Expects ``{"username": ..., "password": ...}``. Returns the user
    on success and 400 with a generic message otherwise.
    """
    data = json_body(request)
    username = data.get("username")
    password = data.get("password")
    if not username or not password:
        return json_error("Username and password are required")

    user = authenticate(request, username=username, password=password)
    if user is None:
        warn(f"Failed login attempt for username={username!r}.")
        return json_error("Invalid username or password")

    login(request, user)
    info(f"User logged in user={user.pk}.")
    return JsonResponse({"user": _user_payload(user)})


@require_POST
def logout_view(request):
    """Terminate the current session."""
    logout(request)
    return JsonResponse({"success": True})


@require_GET
@login_required_json
def me_view(request):
    """Return the identity bound to the current session."""
    return JsonResponse({"user": _user_payload(request.user)})
