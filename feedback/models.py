# feedback/models.py
"""
Database models for the feedback application.

A player leaves one feedback per camp, rating the accommodation,
the tennis and the excursions, with free text and photo links.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from camps.models import Camp


def rating_validators(label: str) -> list:
    """Validators restricting a rating to 1-5, with a message naming it."""
    message = f"{label} rating must be between 1 and 5"
    return [MinValueValidator(1, message=message), MaxValueValidator(5, message=message)]


class Feedback(models.Model):
    """
    Model representing a player's feedback on a camp.

    Attributes
    ----------
    player : ForeignKey
        The user who wrote the feedback.
    camp : ForeignKey
        The camp being rated.
    accommodation_rating, tennis_rating, excursions_rating
        Ratings from 1 to 5; only the tennis rating is required.
    accommodation_text, tennis_text, excursions_text, overall_text
        Free text; only the overall text is required.
    photo_urls : JSONField
        Links to uploaded photos, stored as given.
    consent_given : BooleanField
        The player agreed to the feedback being used.
    """

    player = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="feedbacks",
        verbose_name="Player",
    )
    camp = models.ForeignKey(
        Camp,
        on_delete=models.CASCADE,
        related_name="feedbacks",
        verbose_name="Camp",
    )
    accommodation_rating = models.SmallIntegerField(
        null=True, blank=True, validators=rating_validators("Accommodation")
    )
    accommodation_text = models.TextField(blank=True)
    tennis_rating = models.SmallIntegerField(validators=rating_validators("Tennis"))
    tennis_text = models.TextField(blank=True)
    excursions_rating = models.SmallIntegerField(
        null=True, blank=True, validators=rating_validators("Excursions")
    )
    excursions_text = models.TextField(blank=True)
    overall_text = models.TextField()
    photo_urls = models.JSONField(default=list, blank=True)
    consent_given = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("player", "camp")
        ordering = ["-created_at"]
        verbose_name_plural = "Feedback"

    def __str__(self) -> str:
        return f"Feedback {self.player} on {self.camp}"

    def as_dict(self) -> dict:
        return {
            "id": self.pk,
            "player_id": self.player_id,
            "camp_id": self.camp_id,
            "accommodation_rating": self.accommodation_rating,
            "accommodation_text": self.accommodation_text,
            "tennis_rating": self.tennis_rating,
            "tennis_text": self.tennis_text,
            "excursions_rating": self.excursions_rating,
            "excursions_text": self.excursions_text,
            "overall_text": self.overall_text,
            "photo_urls": self.photo_urls,
            "consent_given": self.consent_given,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
