from datetime import timedelta

from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone

from accounts.models import UserProfile
from camps.management.commands.bootstrap_camps import next_camp_start
from camps.models import Camp


class BootstrapCampsTests(TestCase):
    def test_creates_users_and_upcoming_camp(self):
        call_command("bootstrap_camps")

        start = next_camp_start(timezone.now().date())
        camp = Camp.objects.get(start_date=start)
        assert camp.end_date == start + timedelta(days=4)
        assert camp.capacity == 7
        assert camp.coach.username == "coach"
        assert list(camp.players.values_list("username", flat=True)) == ["player"]

        roles = dict(UserProfile.objects.values_list("user__username", "role"))
        assert roles == {"admin": "admin", "coach": "coach", "player": "player"}

    def test_is_idempotent(self):
        call_command("bootstrap_camps")
        call_command("bootstrap_camps")
        assert Camp.objects.count() == 1
