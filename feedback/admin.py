# feedback/admin.py
"""
Admin configuration for the feedback application.
"""

from django.contrib import admin
from .models import Feedback


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "player",
        "camp",
        "tennis_rating",
        "accommodation_rating",
        "excursions_rating",
        "consent_given",
        "created_at",
    )
    list_filter = ("camp", "tennis_rating")
    search_fields = ("player__username", "overall_text")
