# accounts/urls.py
"""
URL configuration for the accounts application.

Session login, logout and current-identity endpoints.
"""

from django.urls import path
from .views import login_view, logout_view, me_view

# Application namespace for reverse lookups
app_name = "accounts"

#: URL patterns for the accounts application
urlpatterns = [
    path("login/", login_view, name="login"),
    path("logout/", logout_view, name="logout"),
    path("me/", me_view, name="me"),
]
