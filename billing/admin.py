# billing/admin.py
"""
Admin configuration for the billing application.

Payments are listed read-mostly: status changes go through the
back-office endpoints so that the registration follows.
"""

from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Payment model.

    Attributes
    ----------
    list_display : tuple
        Columns of the change list.
    list_filter : tuple
        Sidebar filters on method, type and status.
    search_fields : tuple
        Participant name and e-mail, provider identifiers.
    readonly_fields : tuple
        Provider identifiers and timestamps.
    """

    list_display = (
        "id",
        "registration",
        "method",
        "payment_type",
        "amount",
        "status",
        "created_at",
        "completed_at",
    )
    list_filter = ("method", "payment_type", "status")
    search_fields = (
        "registration__name",
        "registration__email",
        "provider_session_id",
        "provider_payment_intent_id",
    )
    readonly_fields = (
        "provider_session_id",
        "provider_payment_intent_id",
        "created_at",
        "completed_at",
        "transfer_reported_at",
    )
