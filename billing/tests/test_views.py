"""
HTTP tests for payment start and reconciliation.

Covers:
- starting card and manual payments through the camp-scoped endpoint;
- the signed provider webhook and the session verification fallback;
- the manual transfer flow up to the admin confirmation;
- the provider intent status sync;
- over-booking when two payments confirm the last slot.
"""

import json
from types import SimpleNamespace
from unittest.mock import patch

import stripe
from django.contrib.auth.models import User
from django.test import Client, TestCase, override_settings
from django.urls import reverse

from billing.models import Payment
from registrations.availability import check_availability
from registrations.models import Registration
from registrations.tests.utils import fill_camp, make_camp, make_registration, registration_payload
from .test_gateways import SECRET, sign

Status = Registration.Status


def completed_event(session_id, registration_id, **session):
    obj = {
        "id": session_id,
        "object": "checkout.session",
        "payment_status": "paid",
        "payment_intent": "pi_123",
        "metadata": {"registration_id": str(registration_id)},
    }
    obj.update(session)
    return {"id": "evt_1", "type": "checkout.session.completed", "data": {"object": obj}}


@override_settings(PAYMENT_BACKEND="local", STRIPE_WEBHOOK_SECRET=SECRET)
class PaymentFlowTestCase(TestCase):
    def setUp(self):
        self.camp = make_camp(capacity=7)
        self.admin = User.objects.create_user("boss", password="pw", is_staff=True)

    def post_json(self, url, data, client=None, **extra):
        return (client or self.client).post(
            url, data=json.dumps(data), content_type="application/json", **extra
        )

    def payment_url(self, camp=None):
        return reverse("registrations:payment", args=[(camp or self.camp).pk])

    def start(self, registration, method="card", payment_type="deposit"):
        return self.post_json(
            self.payment_url(registration.camp),
            {
                "registration_id": registration.pk,
                "payment_method": method,
                "payment_type": payment_type,
            },
        )

    def send_webhook(self, event, secret=SECRET):
        payload = json.dumps(event)
        return self.client.post(
            reverse("billing:stripe_webhook"),
            data=payload,
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=sign(payload, secret),
        )


class StartPaymentViewTests(PaymentFlowTestCase):
    def test_card_payment_returns_checkout_url(self):
        registration = make_registration(self.camp)
        resp = self.start(registration)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        payment = Payment.objects.get(pk=body["payment_id"])
        self.assertEqual(body["session_id"], payment.provider_session_id)
        self.assertIn(payment.provider_session_id, body["url"])

    def test_missing_fields(self):
        registration = make_registration(self.camp)
        resp = self.post_json(self.payment_url(), {"registration_id": registration.pk})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Missing required fields"})

    def test_unknown_camp_and_registration(self):
        registration = make_registration(self.camp)
        resp = self.post_json(
            reverse("registrations:payment", args=[999]),
            {"registration_id": registration.pk, "payment_method": "card", "payment_type": "full"},
        )
        self.assertEqual(resp.json(), {"error": "Camp not found"})
        resp = self.post_json(
            self.payment_url(),
            {"registration_id": 999, "payment_method": "card", "payment_type": "full"},
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Registration not found"})

    def test_invalid_method(self):
        resp = self.start(make_registration(self.camp), method="cash")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Invalid payment method"})

    @override_settings(PAYMENT_BACKEND="stripe", STRIPE_SECRET_KEY="sk_test_1")
    def test_provider_failure_is_a_bad_gateway(self):
        registration = make_registration(self.camp)
        with patch(
            "billing.gateways.stripe.checkout.Session.create",
            side_effect=stripe.AuthenticationError("bad key"),
        ):
            resp = self.start(registration)
        self.assertEqual(resp.status_code, 502)
        self.assertEqual(resp.json(), {"error": "Payment provider error"})
        self.assertFalse(Payment.objects.exists())


class WebhookTests(PaymentFlowTestCase):
    def setUp(self):
        super().setUp()
        self.registration = make_registration(self.camp)
        self.payment_id = self.start(self.registration).json()["payment_id"]
        self.payment = Payment.objects.get(pk=self.payment_id)

    def test_completed_session_confirms_registration(self):
        resp = self.send_webhook(
            completed_event(self.payment.provider_session_id, self.registration.pk)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"received": True})

        self.payment.refresh_from_db()
        self.registration.refresh_from_db()
        self.assertEqual(self.payment.status, Payment.Status.COMPLETED)
        self.assertEqual(self.payment.provider_payment_intent_id, "pi_123")
        self.assertEqual(self.registration.status, Status.CONFIRMED)

    def test_redelivery_is_harmless(self):
        event = completed_event(self.payment.provider_session_id, self.registration.pk)
        self.send_webhook(event)
        self.payment.refresh_from_db()
        completed_at = self.payment.completed_at

        resp = self.send_webhook(event)
        self.assertEqual(resp.status_code, 200)
        self.payment.refresh_from_db()
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Status.CONFIRMED)
        self.assertEqual(self.payment.completed_at, completed_at)
        self.assertEqual(self.registration.payments.count(), 1)

    def test_bad_signature_changes_nothing(self):
        resp = self.send_webhook(
            completed_event(self.payment.provider_session_id, self.registration.pk),
            secret="whsec_wrong",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Invalid signature"})
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Status.PENDING)

    def test_missing_signature(self):
        resp = self.client.post(
            reverse("billing:stripe_webhook"),
            data=json.dumps(completed_event("cs_x", self.registration.pk)),
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Missing signature or webhook secret"})

    @override_settings(STRIPE_WEBHOOK_SECRET="")
    def test_missing_secret(self):
        resp = self.send_webhook(completed_event("cs_x", self.registration.pk))
        self.assertEqual(resp.status_code, 400)

    def test_other_events_are_acknowledged(self):
        event = completed_event(self.payment.provider_session_id, self.registration.pk)
        event["type"] = "checkout.session.expired"
        resp = self.send_webhook(event)
        self.assertEqual(resp.status_code, 200)
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Status.PENDING)

    def test_unpaid_completion_is_ignored(self):
        resp = self.send_webhook(
            completed_event(
                self.payment.provider_session_id,
                self.registration.pk,
                payment_status="unpaid",
            )
        )
        self.assertEqual(resp.status_code, 200)
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.status, Payment.Status.PENDING)

    def test_missing_registration_metadata(self):
        resp = self.send_webhook(
            completed_event(self.payment.provider_session_id, "", metadata={})
        )
        self.assertEqual(resp.status_code, 200)
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Status.PENDING)

    def test_unknown_session(self):
        resp = self.send_webhook(completed_event("cs_unknown", self.registration.pk))
        self.assertEqual(resp.status_code, 200)
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Status.PENDING)

    def test_cancelled_registration_stays_cancelled(self):
        Registration.objects.filter(pk=self.registration.pk).update(status=Status.CANCELLED)
        with patch("billing.reconciliation.error") as log_error:
            self.send_webhook(
                completed_event(self.payment.provider_session_id, self.registration.pk)
            )
        self.payment.refresh_from_db()
        self.registration.refresh_from_db()
        self.assertEqual(self.payment.status, Payment.Status.COMPLETED)
        self.assertEqual(self.registration.status, Status.CANCELLED)
        log_error.assert_called_once()

    def test_webhook_is_csrf_exempt(self):
        payload = json.dumps(
            completed_event(self.payment.provider_session_id, self.registration.pk)
        )
        client = Client(enforce_csrf_checks=True)
        resp = client.post(
            reverse("billing:stripe_webhook"),
            data=payload,
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=sign(payload),
        )
        self.assertEqual(resp.status_code, 200)

    def test_get_not_allowed(self):
        self.assertEqual(self.client.get(reverse("billing:stripe_webhook")).status_code, 405)


class VerifySessionTests(PaymentFlowTestCase):
    def setUp(self):
        super().setUp()
        self.url = reverse("billing:verify_session")
        self.registration = make_registration(self.camp)
        self.payment = Payment.objects.get(pk=self.start(self.registration).json()["payment_id"])

    def test_local_session_is_confirmed(self):
        resp = self.post_json(self.url, {"session_id": self.payment.provider_session_id})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"paid": True, "updated": True})
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Status.CONFIRMED)

        # Same answer and no error when the webhook already did the work
        resp = self.post_json(self.url, {"session_id": self.payment.provider_session_id})
        self.assertEqual(resp.json(), {"paid": True, "updated": True})

    def test_missing_session_id(self):
        resp = self.post_json(self.url, {})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "session_id is required"})

    def test_unknown_local_session_has_no_registration(self):
        resp = self.post_json(self.url, {"session_id": "cs_local_unknown"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "No registration_id in session metadata"})

    @override_settings(PAYMENT_BACKEND="stripe", STRIPE_SECRET_KEY="sk_test_1")
    def test_unpaid_stripe_session(self):
        session = SimpleNamespace(
            id=self.payment.provider_session_id,
            payment_status="unpaid",
            metadata={"registration_id": str(self.registration.pk)},
        )
        with patch("billing.gateways.stripe.checkout.Session.retrieve", return_value=session):
            resp = self.post_json(self.url, {"session_id": session.id})
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["paid"])
        self.registration.refresh_from_db()
        self.assertEqual(self.registration.status, Status.PENDING)

    @override_settings(PAYMENT_BACKEND="stripe", STRIPE_SECRET_KEY="sk_test_1")
    def test_paid_stripe_session(self):
        session = SimpleNamespace(
            id=self.payment.provider_session_id,
            payment_status="paid",
            payment_intent="pi_9",
            metadata={"registration_id": str(self.registration.pk)},
        )
        with patch("billing.gateways.stripe.checkout.Session.retrieve", return_value=session):
            resp = self.post_json(self.url, {"session_id": session.id})
        self.assertEqual(resp.json(), {"paid": True, "updated": True})
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.provider_payment_intent_id, "pi_9")

    @override_settings(PAYMENT_BACKEND="stripe", STRIPE_SECRET_KEY="sk_test_1")
    def test_paid_session_without_payment_row(self):
        session = SimpleNamespace(
            id="cs_elsewhere",
            payment_status="paid",
            metadata={"registration_id": str(self.registration.pk)},
        )
        with patch("billing.gateways.stripe.checkout.Session.retrieve", return_value=session):
            resp = self.post_json(self.url, {"session_id": session.id})
        self.assertEqual(resp.json(), {"paid": True, "updated": False})

    @override_settings(PAYMENT_BACKEND="stripe", STRIPE_SECRET_KEY="sk_test_1")
    def test_provider_failure(self):
        with patch(
            "billing.gateways.stripe.checkout.Session.retrieve",
            side_effect=stripe.InvalidRequestError("No such session", "id"),
        ):
            resp = self.post_json(self.url, {"session_id": "cs_bad"})
        self.assertEqual(resp.status_code, 502)


class ManualTransferFlowTests(PaymentFlowTestCase):
    def test_pending_to_awaiting_to_confirmed(self):
        resp = self.post_json(
            reverse("registrations:register", args=[self.camp.pk]), registration_payload()
        )
        registration = Registration.objects.get(pk=resp.json()["registration"]["id"])
        self.assertEqual(registration.status, Status.PENDING)

        resp = self.start(registration, method="revolut", payment_type="full")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["requires_manual_verification"])
        payment_id = resp.json()["payment_id"]
        registration.refresh_from_db()
        self.assertEqual(registration.status, Status.AWAITING_MANUAL_VERIFICATION)

        resp = self.post_json(
            reverse("registrations:manual_transfer", args=[self.camp.pk]),
            {"payment_id": payment_id},
        )
        self.assertEqual(resp.status_code, 200)
        payment = Payment.objects.get(pk=payment_id)
        self.assertIsNotNone(payment.transfer_reported_at)
        self.assertEqual(payment.status, Payment.Status.PENDING)

        self.client.login(username="boss", password="pw")
        confirm_url = reverse("backoffice_confirm", args=[registration.pk])
        resp = self.client.post(confirm_url)
        self.assertEqual(resp.status_code, 200)
        registration.refresh_from_db()
        payment.refresh_from_db()
        self.assertEqual(registration.status, Status.CONFIRMED)
        self.assertEqual(payment.status, Payment.Status.COMPLETED)

        resp = self.client.post(confirm_url)
        self.assertEqual(resp.status_code, 400)
        self.assertIn('cannot be confirmed from status "confirmed"', resp.json()["error"])

    def test_balance_by_transfer_after_card_deposit(self):
        registration = make_registration(self.camp)
        session_id = self.start(registration, method="card", payment_type="deposit").json()[
            "session_id"
        ]
        self.send_webhook(completed_event(session_id, registration.pk))
        registration.refresh_from_db()
        self.assertEqual(registration.status, Status.CONFIRMED)

        resp = self.start(registration, method="manual_transfer", payment_type="full")
        self.assertEqual(resp.status_code, 200)
        balance_id = resp.json()["payment_id"]
        self.post_json(
            reverse("registrations:manual_transfer", args=[self.camp.pk]),
            {"payment_id": balance_id},
        )

        self.client.login(username="boss", password="pw")
        # The registration itself is already confirmed
        resp = self.client.post(reverse("backoffice_confirm", args=[registration.pk]))
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(reverse("backoffice_payment_confirm", args=[balance_id]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["payment"]["status"], "completed")
        balance = Payment.objects.get(pk=balance_id)
        self.assertEqual(balance.status, Payment.Status.COMPLETED)
        self.assertIsNotNone(balance.completed_at)
        registration.refresh_from_db()
        self.assertEqual(registration.status, Status.CONFIRMED)

        resp = self.client.post(reverse("backoffice_payment_confirm", args=[balance_id]))
        self.assertEqual(resp.status_code, 400)
        self.assertIn('cannot be confirmed from status "completed"', resp.json()["error"])

    def test_notice_for_card_payment_is_not_found(self):
        registration = make_registration(self.camp)
        payment_id = self.start(registration).json()["payment_id"]
        resp = self.post_json(
            reverse("registrations:manual_transfer", args=[self.camp.pk]),
            {"payment_id": payment_id},
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Payment not found"})

    def test_notice_requires_payment_id(self):
        resp = self.post_json(reverse("registrations:manual_transfer", args=[self.camp.pk]), {})
        self.assertEqual(resp.status_code, 400)


class IntentSyncTests(PaymentFlowTestCase):
    def setUp(self):
        super().setUp()
        self.registration = make_registration(self.camp)
        self.payment = Payment.objects.create(
            registration=self.registration,
            method=Payment.Method.CARD,
            payment_type=Payment.Type.DEPOSIT,
            amount=250,
            provider_session_id="cs_sync",
            provider_payment_intent_id="pi_sync",
        )

    def put(self, data):
        return self.client.put(
            self.payment_url(), data=json.dumps(data), content_type="application/json"
        )

    def test_admin_only(self):
        self.assertEqual(self.put({"payment_intent_id": "pi_sync"}).status_code, 401)
        User.objects.create_user("player", password="pw")
        self.client.login(username="player", password="pw")
        self.assertEqual(self.put({"payment_intent_id": "pi_sync"}).status_code, 403)

    def test_succeeded(self):
        self.client.login(username="boss", password="pw")
        resp = self.put({"payment_intent_id": "pi_sync", "status": "succeeded"})
        self.assertEqual(resp.status_code, 200)
        self.payment.refresh_from_db()
        self.registration.refresh_from_db()
        self.assertEqual(self.payment.status, Payment.Status.COMPLETED)
        self.assertEqual(self.registration.status, Status.CONFIRMED)

    def test_failed(self):
        self.client.login(username="boss", password="pw")
        self.put({"payment_intent_id": "pi_sync", "status": "requires_payment_method"})
        self.payment.refresh_from_db()
        self.registration.refresh_from_db()
        self.assertEqual(self.payment.status, Payment.Status.FAILED)
        self.assertEqual(self.registration.status, Status.PENDING)

    def test_completed_payment_is_never_failed(self):
        Payment.objects.filter(pk=self.payment.pk).update(status=Payment.Status.COMPLETED)
        self.client.login(username="boss", password="pw")
        self.put({"payment_intent_id": "pi_sync", "status": "canceled"})
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.status, Payment.Status.COMPLETED)

    def test_unknown_intent(self):
        self.client.login(username="boss", password="pw")
        resp = self.put({"payment_intent_id": "pi_nope", "status": "succeeded"})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Payment not found"})

    def test_missing_intent(self):
        self.client.login(username="boss", password="pw")
        self.assertEqual(self.put({"status": "succeeded"}).status_code, 400)


class OverbookingTests(PaymentFlowTestCase):
    def test_two_payments_can_confirm_the_last_slot(self):
        """
        Registrations are only gated on creation: two registrants who
        both got in before the last slot was taken can both pay.
        """
        fill_camp(self.camp, 6)
        first = make_registration(self.camp, email="first@example.com")
        second = make_registration(self.camp, email="second@example.com")

        sessions = []
        for registration in (first, second):
            payment = Payment.objects.get(pk=self.start(registration).json()["payment_id"])
            sessions.append((payment.provider_session_id, registration.pk))

        with patch("billing.reconciliation.warn") as log_warn:
            for session_id, registration_id in sessions:
                self.send_webhook(completed_event(session_id, registration_id))

        availability = check_availability(self.camp)
        self.assertEqual(availability.confirmed_count, 8)
        self.assertGreater(availability.confirmed_count, availability.max_players)
        self.assertTrue(any("over capacity" in c.args[0] for c in log_warn.call_args_list))
