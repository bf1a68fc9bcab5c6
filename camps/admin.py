# camps/admin.py
"""
Admin configuration for the camps application.

Camp and roster management happens in the Django admin: staff
create camps, assign a coach and add players inline.
"""

from django.contrib import admin
from .models import Camp, CampPlayer


class CampPlayerInline(admin.TabularInline):
    model = CampPlayer
    extra = 0
    autocomplete_fields = ("player",)


@admin.register(Camp)
class CampAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Camp model.

    Provides list display, filters and an inline roster editor.
    """
    list_display = ("__str__", "package", "start_date", "end_date", "capacity", "coach")
    list_filter = ("package",)
    date_hierarchy = "start_date"
    inlines = [CampPlayerInline]


@admin.register(CampPlayer)
class CampPlayerAdmin(admin.ModelAdmin):
    list_display = ("camp", "player", "created_at")
    list_filter = ("camp",)
    search_fields = ("player__username", "player__first_name", "player__last_name")
