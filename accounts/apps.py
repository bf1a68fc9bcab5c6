# accounts/apps.py
"""
Application configuration for the accounts module.
"""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """
    Accounts: user roles (player, coach, admin) and the JSON session
    endpoints.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
    verbose_name = "Accounts"

    def ready(self) -> None:
        # Connect profile creation signals
        from . import signals  # noqa: F401
