# registrations/apps.py
"""
Application configuration for the registrations module.
"""

from django.apps import AppConfig


class RegistrationsConfig(AppConfig):
    """
    Configuration class for the registrations application.

    Attributes
    ----------
    default_auto_field : str
        Primary key field type for models that do not define one.
    name : str
        The full Python path to the application.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "registrations"
