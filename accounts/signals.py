# accounts/signals.py
"""
Signals for the accounts application.

Every user carries a :class:`UserProfile` holding their role. New
users get one on creation; users that existed before the accounts
app was migrated get one after ``migrate``.
"""

from django.contrib.auth import get_user_model
from django.db import DEFAULT_DB_ALIAS
from django.db.models.signals import post_migrate, post_save
from django.dispatch import receiver

from .models import UserProfile

User = get_user_model()


def default_role(user) -> str:
    """Superusers start as admins, everyone else as a player."""
    return UserProfile.Role.ADMIN if user.is_superuser else UserProfile.Role.PLAYER


@receiver(post_save, sender=User)
def ensure_profile(sender, instance, created, raw=False, **kwargs):
    """
    Give a newly created user a profile.

    Fixture loading (``raw``) is skipped; fixtures carry their own
    profiles.
    """
    if created and not raw:
        UserProfile.objects.get_or_create(
            user=instance, defaults={"role": default_role(instance)}
        )


@receiver(post_migrate)
def backfill_profiles(sender, apps=None, using=DEFAULT_DB_ALIAS, **kwargs):
    """
    Create the missing profiles once the accounts app is migrated.

    Parameters
    ----------
    sender : AppConfig
        The app that was just migrated; only ``accounts`` triggers
        the backfill.
    apps : Apps
        Model registry in the state the migrations left it.
    using : str
        Database alias that was migrated.
    """
    if sender.name != "accounts" or apps is None:
        return
    try:
        apps.get_model("accounts", "UserProfile")
    except LookupError:
        # Migrated back to zero
        return

    users = User.objects.using(using).filter(profile__isnull=True).only("id", "is_superuser")
    UserProfile.objects.using(using).bulk_create(
        [UserProfile(user=u, role=default_role(u)) for u in users],
        ignore_conflicts=True,
    )
