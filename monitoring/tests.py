# monitoring/tests.py
"""
Test suite for the monitoring application.

Covers the HTML log helpers and the staff-only log view.
"""

import tempfile

from django.contrib.auth.models import User
from django.test import TestCase, override_settings
from django.urls import reverse

from monitoring.html_logger import error, info, log_file, warn


class HtmlLoggerTests(TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.settings_override = override_settings(MONITORING_LOG_DIR=self.tmp.name)
        self.settings_override.enable()
        self.addCleanup(self.settings_override.disable)

    def test_entries_are_appended_with_levels(self):
        info("Registration created registration=1 camp=1.")
        warn("Camp camp=1 is over capacity: 8/7 confirmed.")
        error("Orphaned checkout session cs_1.")

        content = log_file().read_text(encoding="utf-8")
        self.assertTrue(content.startswith("<!doctype html>"))
        self.assertIn('class="log-info"', content)
        self.assertIn('class="log-warn"', content)
        self.assertIn('class="log-error"', content)
        self.assertIn("over capacity: 8/7", content)

    def test_messages_are_escaped(self):
        warn("Failed login attempt for username='<script>alert(1)</script>'.")
        content = log_file().read_text(encoding="utf-8")
        self.assertNotIn("<script>", content)
        self.assertIn("&lt;script&gt;", content)

    def test_forwards_to_logging(self):
        with self.assertLogs("tennis_camp", level="WARNING") as logs:
            warn("payment refused")
        self.assertIn("payment refused", logs.output[0])

    def test_log_view_is_staff_only(self):
        info("hello")
        url = reverse("monitoring:logs")

        resp = self.client.get(url)
        self.assertEqual(resp.status_code, 302)

        User.objects.create_user("staff", password="pw", is_staff=True)
        self.client.login(username="staff", password="pw")
        resp = self.client.get(url)
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "hello")
        self.assertTrue(resp.content.decode().endswith("</body></html>"))
