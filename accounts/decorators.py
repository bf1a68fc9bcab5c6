# accounts/decorators.py
"""
View guards for the JSON API.

Django's ``login_required`` and ``staff_member_required`` answer
with a redirect to a login page, which a JSON client cannot follow.
These guards answer with a JSON 401 or 403 instead.
"""

from functools import wraps

from django.http import JsonResponse

from .models import UserProfile


def is_admin(user) -> bool:
    """
    Check whether a user may perform back-office actions.

    Parameters
    ----------
    user : User
        The user instance to evaluate.

    Returns
    -------
    bool
        True for authenticated staff, superusers and users whose
        profile carries the admin role.
    """
    if not user.is_authenticated:
        return False
    if user.is_staff or user.is_superuser:
        return True
    profile = getattr(user, "profile", None)
    return bool(profile and profile.role == UserProfile.Role.ADMIN)


def login_required_json(view):
    """Reject anonymous requests with a JSON 401."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({"error": "Authentication required"}, status=401)
        return view(request, *args, **kwargs)

    return wrapper


def admin_required(view):
    """Reject anonymous requests with 401 and non-admins with 403."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({"error": "Authentication required"}, status=401)
        if not is_admin(request.user):
            return JsonResponse({"error": "Admin access required"}, status=403)
        return view(request, *args, **kwargs)

    return wrapper
