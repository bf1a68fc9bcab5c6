# accounts/models.py
"""
Database models for the accounts application.

This module defines the UserProfile model, which extends
the built-in Django user with the role tag used to pick the
dashboard (player, coach) and to gate back-office actions (admin).
"""

from django.conf import settings
from django.db import models


class UserProfile(models.Model):
    """
    Profile model linked to the Django user.

    Attributes
    ----------
    user : OneToOneField
        A one-to-one relationship with ``settings.AUTH_USER_MODEL``.
    role : CharField
        The user's role in the camp application. Defaults to player.
    """

    class Role(models.TextChoices):
        """
        Enumeration of user roles.

        PLAYER
            Camp participant; sees assessments, reports and feedback.
        COACH
            Coach assigned to camps; writes reports.
        ADMIN
            Camp staff; manages camps, users and registrations.
        """

        PLAYER = "player", "Player"
        COACH = "coach", "Coach"
        ADMIN = "admin", "Admin"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    role = models.CharField(
        "Role",
        max_length=16,
        choices=Role.choices,
        default=Role.PLAYER,
    )

    def __str__(self) -> str:
        return f"{self.user} ({self.role})"

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN
