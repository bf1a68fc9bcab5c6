# billing/migrations/0001_initial.py
"""
Initial migration for the billing application.

Creates the Payment model, linked to a Registration.
"""

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        # Payment links to Registration
        ("registrations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "method",
                    models.CharField(
                        choices=[("card", "Card"), ("manual_transfer", "Manual transfer")],
                        max_length=16,
                        verbose_name="Method",
                    ),
                ),
                (
                    "payment_type",
                    models.CharField(
                        choices=[("deposit", "Deposit"), ("full", "Full payment")],
                        max_length=16,
                        verbose_name="Type",
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(decimal_places=2, max_digits=8, verbose_name="Amount"),
                ),
                (
                    "currency",
                    models.CharField(default="gbp", max_length=3, verbose_name="Currency"),
                ),
                (
                    "base_camp_price",
                    models.DecimalField(decimal_places=2, default=0, max_digits=8),
                ),
                (
                    "bedroom_upgrade_price",
                    models.DecimalField(decimal_places=2, default=0, max_digits=8),
                ),
                (
                    "options_total_price",
                    models.DecimalField(decimal_places=2, default=0, max_digits=8),
                ),
                (
                    "provider_session_id",
                    models.CharField(blank=True, max_length=255, null=True, unique=True),
                ),
                (
                    "provider_payment_intent_id",
                    models.CharField(blank=True, db_index=True, max_length=255, null=True),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("completed", "Completed"),
                            ("failed", "Failed"),
                        ],
                        default="pending",
                        max_length=16,
                        verbose_name="Status",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now, verbose_name="Created at"
                    ),
                ),
                ("transfer_reported_at", models.DateTimeField(blank=True, null=True)),
                (
                    "completed_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="Completed at"),
                ),
                (
                    "registration",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="registrations.registration",
                        verbose_name="Registration",
                    ),
                ),
            ],
            options={"ordering": ["-created_at"]},
        ),
    ]
