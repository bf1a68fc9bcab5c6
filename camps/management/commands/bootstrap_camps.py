# camps/management/commands/bootstrap_camps.py
"""
Management command to initialize demo data.

This command creates demo users (admin, coach, player) and an
upcoming camp so the registration flow can be tried end to end.
It can be executed using::

    python manage.py bootstrap_camps
"""

from datetime import date, timedelta

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.utils import timezone

from accounts.models import UserProfile
from camps.models import Camp, CampPlayer

#: Nights spent at the riad for a standard camp
CAMP_NIGHTS = 4


def next_camp_start(today: date) -> date:
    """Return the 5th of the month following ``today``."""
    if today.month == 12:
        return date(today.year + 1, 1, 5)
    return date(today.year, today.month + 1, 5)


class Command(BaseCommand):
    """
    Django management command for demo initialization.

    Creates:
    - An administrator account (``admin/admin123``).
    - A coach account (``coach/coach123``).
    - A player account (``player/player123``) on the camp roster.
    - A stay-and-play camp next month, capacity 7, coached by the coach.
    """

    help = "Create demo users and an upcoming camp."

    def _user(self, username, password, role, **defaults):
        user, created = User.objects.get_or_create(username=username, defaults=defaults)
        if created:
            user.set_password(password)
            user.save()
            self.stdout.write(self.style.SUCCESS(f"{role.label} : {username}/{password}"))
        UserProfile.objects.update_or_create(user=user, defaults={"role": role})
        return user

    def handle(self, *args, **options):
        admin = self._user(
            "admin", "admin123", UserProfile.Role.ADMIN, is_staff=True, is_superuser=True
        )
        coach = self._user(
            "coach", "coach123", UserProfile.Role.COACH, first_name="Demo", last_name="Coach"
        )
        player = self._user(
            "player", "player123", UserProfile.Role.PLAYER, first_name="Demo", last_name="Player"
        )

        start = next_camp_start(timezone.now().date())
        camp, _ = Camp.objects.update_or_create(
            start_date=start,
            package=Camp.Package.STAY_AND_PLAY,
            defaults={
                "end_date": start + timedelta(days=CAMP_NIGHTS),
                "capacity": 7,
                "total_tennis_hours": 12,
                "accommodation_name": "Riad Demo",
                "coach": coach,
            },
        )
        CampPlayer.objects.get_or_create(camp=camp, player=player)

        self.stdout.write(
            self.style.SUCCESS(f"Demo data initialized (camp={camp.pk}, admin={admin.pk}).")
        )
