# monitoring/apps.py
"""
Application configuration for the monitoring module.
"""

from django.apps import AppConfig


class MonitoringConfig(AppConfig):
    """
    Monitoring has no models: it owns the HTML application log
    (:mod:`monitoring.html_logger`) and its staff view.
    """

    name = "monitoring"
    verbose_name = "Monitoring"
