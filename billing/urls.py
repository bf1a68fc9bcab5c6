# billing/urls.py
"""
URL configuration for the billing application.

This module defines the routes called by the payment provider and
by the confirmation page. Payment routes scoped to a camp live
under ``/register/<camp>/payment/`` (see ``registrations.urls``).
"""

from django.urls import path
from .views import stripe_webhook, verify_session

# Application namespace for reverse lookups
app_name = "billing"

#: URL patterns for the billing application
urlpatterns = [
    # Signed provider webhook, CSRF-exempt
    path("stripe/webhook/", stripe_webhook, name="stripe_webhook"),
    # Client fallback when the webhook was missed
    path("stripe/verify-session/", verify_session, name="verify_session"),
]
