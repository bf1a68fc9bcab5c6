"""
Root URL configuration for the tennis camp project.

This module defines the global URL routes and delegates
to application-specific ``urls.py`` modules.

For more details, see:
https://docs.djangoproject.com/en/stable/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path, include

from registrations.views_backoffice import (
    backoffice_cancel,
    backoffice_confirm,
    backoffice_payment_confirm,
    backoffice_registrations,
)

#: Global URL patterns for the project
urlpatterns = [
    # Django admin interface (camp and user management)
    path("admin/", admin.site.urls),

    # Session identity (login, logout, current user)
    path("accounts/", include("accounts.urls")),

    # Registration flow: availability, registration, payment start
    path("register/", include("registrations.urls")),

    # Payment provider callbacks
    path("billing/", include("billing.urls")),

    # Back-office actions on registrations (admin role only)
    path("backoffice/registrations/", backoffice_registrations, name="backoffice_registrations"),
    path(
        "backoffice/registrations/<int:registration_id>/confirm/",
        backoffice_confirm,
        name="backoffice_confirm",
    ),
    path(
        "backoffice/registrations/<int:registration_id>/cancel/",
        backoffice_cancel,
        name="backoffice_cancel",
    ),
    path(
        "backoffice/payments/<int:payment_id>/confirm/",
        backoffice_payment_confirm,
        name="backoffice_payment_confirm",
    ),

    # Post-camp feedback from players
    path("feedback/", include("feedback.urls")),

    # Monitoring application (HTML application log)
    path("monitoring/", include("monitoring.urls")),
]
