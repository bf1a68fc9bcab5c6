# feedback/apps.py
"""
Application configuration for the feedback module.
"""

from django.apps import AppConfig


class FeedbackConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "feedback"
