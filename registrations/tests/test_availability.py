from django.test import TestCase, override_settings

from registrations.availability import check_availability
from registrations.models import Registration
from .utils import fill_camp, make_camp


class AvailabilityTests(TestCase):
    def test_full_camp(self):
        camp = make_camp(capacity=7)
        fill_camp(camp, 7)
        availability = check_availability(camp)
        self.assertTrue(availability.is_full)
        self.assertEqual(availability.available_spots, 0)
        self.assertEqual(availability.confirmed_count, 7)
        self.assertEqual(availability.max_players, 7)

    def test_only_confirmed_registrations_take_a_slot(self):
        camp = make_camp(capacity=3)
        fill_camp(camp, 2, status=Registration.Status.PENDING)
        fill_camp(camp, 2, status=Registration.Status.AWAITING_MANUAL_VERIFICATION)
        fill_camp(camp, 2, status=Registration.Status.CANCELLED)
        fill_camp(camp, 1)
        availability = check_availability(camp)
        self.assertFalse(availability.is_full)
        self.assertEqual(availability.available_spots, 2)
        self.assertEqual(availability.confirmed_count, 1)

    def test_other_camps_are_not_counted(self):
        camp = make_camp(capacity=2)
        fill_camp(make_camp(capacity=2), 2)
        self.assertEqual(check_availability(camp).confirmed_count, 0)

    @override_settings(CAMP_DEFAULT_CAPACITY=4)
    def test_default_capacity(self):
        camp = make_camp(capacity=None)
        fill_camp(camp, 1)
        self.assertEqual(check_availability(camp).as_dict(), {
            "isFull": False,
            "availableSpots": 3,
            "confirmedCount": 1,
            "maxPlayers": 4,
        })

    def test_over_capacity_reports_no_negative_spots(self):
        camp = make_camp(capacity=2)
        fill_camp(camp, 3)
        availability = check_availability(camp)
        self.assertTrue(availability.is_full)
        self.assertEqual(availability.available_spots, 0)
