# feedback/urls.py
"""
URL configuration for the feedback application.
"""

from django.urls import path

from .views import FeedbackView, feedback_detail

# Application namespace for reverse lookups
app_name = "feedback"

urlpatterns = [
    path("", FeedbackView.as_view(), name="feedback"),
    path("<int:feedback_id>/", feedback_detail, name="detail"),
]
