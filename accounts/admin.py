# accounts/admin.py
"""
Django admin for user roles.

Staff promote a user to coach or admin by editing the role straight
from the profile list.
"""

from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "user_email")
    list_filter = ("role",)
    list_editable = ("role",)
    list_select_related = ("user",)
    search_fields = ("user__username", "user__email")

    @admin.display(description="E-mail", ordering="user__email")
    def user_email(self, obj):
        return obj.user.email
