# billing/apps.py
"""
Application configuration for the billing module.

Billing registers no signals: payment and registration status
changes are made explicitly by :mod:`billing.reconciliation`.
"""

from django.apps import AppConfig


class BillingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "billing"
    verbose_name = "Billing"
