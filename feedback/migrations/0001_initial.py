# feedback/migrations/0001_initial.py
"""
Initial migration for the feedback application.
"""

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


def _rating(label, **kwargs):
    message = f"{label} rating must be between 1 and 5"
    return models.SmallIntegerField(
        validators=[
            django.core.validators.MinValueValidator(1, message=message),
            django.core.validators.MaxValueValidator(5, message=message),
        ],
        **kwargs,
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("camps", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Feedback",
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
                ("accommodation_rating", _rating("Accommodation", blank=True, null=True)),
                ("accommodation_text", models.TextField(blank=True)),
                ("tennis_rating", _rating("Tennis")),
                ("tennis_text", models.TextField(blank=True)),
                ("excursions_rating", _rating("Excursions", blank=True, null=True)),
                ("excursions_text", models.TextField(blank=True)),
                ("overall_text", models.TextField()),
                ("photo_urls", models.JSONField(blank=True, default=list)),
                ("consent_given", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "camp",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="feedbacks",
                        to="camps.camp",
                        verbose_name="Camp",
                    ),
                ),
                (
                    "player",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="feedbacks",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Player",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "Feedback",
                "ordering": ["-created_at"],
                "unique_together": {("player", "camp")},
            },
        ),
    ]
