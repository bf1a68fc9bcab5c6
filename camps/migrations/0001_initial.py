# camps/migrations/0001_initial.py
"""
Initial migration for the camps application.

Creates the Camp model and the CampPlayer roster table.
"""

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Camp",
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
                ("start_date", models.DateField(verbose_name="Start date")),
                ("end_date", models.DateField(verbose_name="End date")),
                (
                    "package",
                    models.CharField(
                        choices=[
                            ("tennis_only", "Tennis only"),
                            ("stay_and_play", "Stay & play"),
                            ("luxury_stay_and_play", "Luxury stay & play"),
                            ("no_tennis", "No tennis"),
                        ],
                        default="stay_and_play",
                        max_length=32,
                        verbose_name="Package",
                    ),
                ),
                (
                    "total_tennis_hours",
                    models.PositiveIntegerField(
                        blank=True, null=True, verbose_name="Tennis hours"
                    ),
                ),
                (
                    "accommodation_name",
                    models.CharField(blank=True, max_length=200, verbose_name="Accommodation"),
                ),
                (
                    "accommodation_details",
                    models.TextField(blank=True, verbose_name="Accommodation details"),
                ),
                (
                    "accommodation_phone",
                    models.CharField(blank=True, max_length=32, verbose_name="Accommodation phone"),
                ),
                (
                    "accommodation_map_link",
                    models.URLField(blank=True, verbose_name="Map link"),
                ),
                (
                    "accommodation_photo_url",
                    models.URLField(blank=True, verbose_name="Photo"),
                ),
                (
                    "capacity",
                    models.PositiveIntegerField(blank=True, null=True, verbose_name="Capacity"),
                ),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="Created at"),
                ),
                (
                    "coach",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="coached_camps",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Coach",
                    ),
                ),
            ],
            options={"ordering": ["-start_date"]},
        ),
        migrations.CreateModel(
            name="CampPlayer",
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
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "camp",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="roster",
                        to="camps.camp",
                    ),
                ),
                (
                    "player",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="camp_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["camp", "player"],
                "unique_together": {("camp", "player")},
            },
        ),
        migrations.AddField(
            model_name="camp",
            name="players",
            field=models.ManyToManyField(
                blank=True,
                related_name="camps",
                through="camps.CampPlayer",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
    ]
