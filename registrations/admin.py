# registrations/admin.py
"""
Admin configuration for the registrations application.

Registrations are shown with their add-ons inline. The status is
read-only here: confirmation and cancellation go through the
back-office endpoints, which apply the lifecycle rules.
"""

from django.contrib import admin
from .models import Registration, RegistrationOption


class RegistrationOptionInline(admin.TabularInline):
    """Add-ons of a registration, priced from the fixed table."""

    model = RegistrationOption
    extra = 0
    readonly_fields = ("price",)


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Registration model.

    Attributes
    ----------
    list_display : tuple
        Participant, camp, room and status columns.
    list_filter : tuple
        Filters on status, bedroom type and camp.
    search_fields : tuple
        Participant name, e-mail and WhatsApp number.
    """

    list_display = ("id", "name", "email", "camp", "bedroom_type", "status", "created_at")
    list_filter = ("status", "bedroom_type", "camp")
    search_fields = ("name", "email", "whatsapp_number")
    readonly_fields = ("status", "created_at", "updated_at")
    inlines = [RegistrationOptionInline]
