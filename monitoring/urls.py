# monitoring/urls.py
"""
URL configuration for the monitoring application.
"""

from django.urls import path
from .views import logs_view

app_name = "monitoring"

urlpatterns = [
    # Staff-only HTML view of the application log
    path("logs/", logs_view, name="logs"),
]
