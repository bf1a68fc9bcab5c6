# registrations/migrations/0001_initial.py
"""
Initial migration for the registrations application.

Creates the Registration and RegistrationOption models.
"""

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("camps", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Registration",
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
                ("name", models.CharField(max_length=200, verbose_name="Name")),
                ("email", models.EmailField(max_length=254, verbose_name="E-mail")),
                (
                    "whatsapp_number",
                    models.CharField(max_length=32, verbose_name="WhatsApp number"),
                ),
                (
                    "tennis_experience_years",
                    models.CharField(
                        choices=[
                            ("1-2 years", "1-2 years"),
                            ("3-5 years", "3-5 years"),
                            ("6-8 years", "6-8 years"),
                            (">8 years", ">8 years"),
                        ],
                        max_length=16,
                        verbose_name="Tennis experience",
                    ),
                ),
                (
                    "play_frequency_per_month",
                    models.CharField(
                        choices=[
                            ("1 time", "1 time"),
                            ("2-3 times", "2-3 times"),
                            ("3-4 times", "3-4 times"),
                            (">4 times", ">4 times"),
                        ],
                        max_length=16,
                        verbose_name="Play frequency per month",
                    ),
                ),
                (
                    "bedroom_type",
                    models.CharField(
                        choices=[
                            ("shared", "Shared double room"),
                            ("private_double", "Private double bedroom"),
                        ],
                        default="shared",
                        max_length=16,
                        verbose_name="Bedroom type",
                    ),
                ),
                (
                    "accepted_cancellation_policy",
                    models.BooleanField(
                        default=False, verbose_name="Accepted cancellation policy"
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("awaiting_manual_verification", "Awaiting manual verification"),
                            ("confirmed", "Confirmed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=32,
                        verbose_name="Status",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="Created at"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(auto_now=True, verbose_name="Updated at"),
                ),
                (
                    "camp",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="registrations",
                        to="camps.camp",
                        verbose_name="Camp",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["camp", "status"], name="registration_camp_status_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="RegistrationOption",
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
                    "option_type",
                    models.CharField(
                        choices=[
                            ("hammam_massage", "Hammam & massage"),
                            ("massage", "Massage"),
                            ("hammam", "Hammam"),
                            ("medina_tour", "Medina tour"),
                            ("friday_dinner", "Friday dinner"),
                        ],
                        max_length=32,
                        verbose_name="Option",
                    ),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2, max_digits=8, verbose_name="Price (£)"
                    ),
                ),
                (
                    "registration",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="options",
                        to="registrations.registration",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "unique_together": {("registration", "option_type")},
            },
        ),
    ]
