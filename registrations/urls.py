# registrations/urls.py
"""
URL configuration for the registrations application.

Routes of the public registration flow, all scoped to a camp:
availability, create/edit, read back, and the payment endpoints
handled by the billing application.
"""

from django.urls import path

from billing.views import PaymentView, manual_transfer_view
from .views import RegistrationView, availability_view, registration_detail

# Application namespace for reverse lookups
app_name = "registrations"

#: URL patterns for the registrations application
urlpatterns = [
    path("<int:camp_id>/availability/", availability_view, name="availability"),
    path("<int:camp_id>/", RegistrationView.as_view(), name="register"),
    path(
        "<int:camp_id>/<int:registration_id>/",
        registration_detail,
        name="detail",
    ),
    path("<int:camp_id>/payment/", PaymentView.as_view(), name="payment"),
    path(
        "<int:camp_id>/payment/manual-transfer/",
        manual_transfer_view,
        name="manual_transfer",
    ),
]
