from decimal import Decimal
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from billing.models import Payment
from registrations.exceptions import CampFullError, RegistrationLockedError
from registrations.models import Registration, RegistrationOption
from registrations.writer import create_registration, update_registration
from .utils import fill_camp, make_camp


def participant(**overrides):
    fields = {
        "name": "Ana",
        "email": "ana@example.com",
        "whatsapp_number": "+447700900123",
        "tennis_experience_years": "3-5 years",
        "play_frequency_per_month": "2-3 times",
        "bedroom_type": "shared",
        "accepted_cancellation_policy": True,
    }
    fields.update(overrides)
    return fields


class CreateRegistrationTests(TestCase):
    def setUp(self):
        self.camp = make_camp(capacity=2)

    def test_creates_pending_registration_with_options(self):
        registration = create_registration(
            self.camp, participant(), ["hammam", "medina_tour"]
        )
        self.assertEqual(registration.status, Registration.Status.PENDING)
        options = list(registration.options.values_list("option_type", "price"))
        self.assertEqual(
            options, [("hammam", Decimal("25.00")), ("medina_tour", Decimal("30.00"))]
        )

    def test_status_cannot_be_chosen_by_caller(self):
        registration = create_registration(self.camp, participant(status="confirmed"))
        registration.refresh_from_db()
        self.assertEqual(registration.status, Registration.Status.PENDING)

    def test_full_camp_is_rejected(self):
        fill_camp(self.camp, 2)
        with self.assertRaises(CampFullError) as ctx:
            create_registration(self.camp, participant())
        self.assertTrue(ctx.exception.availability.is_full)
        self.assertEqual(Registration.objects.filter(email="ana@example.com").count(), 0)

    def test_option_failure_keeps_registration(self):
        with patch.object(
            RegistrationOption.objects, "bulk_create", side_effect=DatabaseError("boom")
        ):
            registration = create_registration(self.camp, participant(), ["massage"])
        self.assertTrue(Registration.objects.filter(pk=registration.pk).exists())
        self.assertEqual(registration.options.count(), 0)


class UpdateRegistrationTests(TestCase):
    def setUp(self):
        self.camp = make_camp()
        self.registration = create_registration(
            self.camp, participant(), ["hammam", "massage", "friday_dinner"]
        )

    def test_replaces_fields_and_options(self):
        update_registration(
            self.registration,
            participant(name="Ana I.", bedroom_type="private_double"),
            ["medina_tour"],
        )
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.name, "Ana I.")
        self.assertEqual(self.registration.bedroom_type, "private_double")
        self.assertEqual(
            list(self.registration.options.values_list("option_type", flat=True)),
            ["medina_tour"],
        )

    def test_clearing_options(self):
        update_registration(self.registration, participant(), [])
        self.assertEqual(self.registration.options.count(), 0)

    def test_only_pending_registrations_can_be_edited(self):
        Registration.objects.filter(pk=self.registration.pk).update(
            status=Registration.Status.AWAITING_MANUAL_VERIFICATION
        )
        self.registration.refresh_from_db()
        with self.assertRaises(RegistrationLockedError):
            update_registration(self.registration, participant(name="Changed"), [])
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.name, "Ana")
        self.assertEqual(self.registration.options.count(), 3)

    def test_status_is_not_editable(self):
        update_registration(self.registration, participant(status="confirmed"), [])
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Registration.Status.PENDING)

    def test_started_payment_freezes_the_price(self):
        payment = Payment.objects.create(
            registration=self.registration,
            method=Payment.Method.CARD,
            payment_type=Payment.Type.FULL,
            amount=Decimal("695"),
            provider_session_id="cs_locked",
        )
        with self.assertRaises(RegistrationLockedError):
            update_registration(
                self.registration, participant(bedroom_type="private_double"), []
            )
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.bedroom_type, "shared")
        self.assertEqual(self.registration.options.count(), 3)

        # An abandoned checkout reported as failed unlocks editing again
        Payment.objects.filter(pk=payment.pk).update(status=Payment.Status.FAILED)
        update_registration(self.registration, participant(name="Ana I."), [])
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.name, "Ana I.")
