# registrations/models.py
"""
Database models for the registrations application.

This module defines the Registration and RegistrationOption models.
A registration is one participant's application to attend a camp;
options are the priced add-ons chosen with it.
"""

from django.db import models

from camps.models import Camp


class Registration(models.Model):
    """
    Model representing a participant's registration for a camp.

    Registrations are created by anonymous registrants, so the
    participant is identified by name, e-mail and WhatsApp number
    rather than by a user account.

    Attributes
    ----------
    camp : ForeignKey
        The camp applied for.
    name, email, whatsapp_number
        Participant contact details.
    tennis_experience_years : CharField
        Experience bracket (see :class:`Experience`).
    play_frequency_per_month : CharField
        Current play frequency (see :class:`PlayFrequency`).
    bedroom_type : CharField
        Shared or private double bedroom.
    accepted_cancellation_policy : BooleanField
        The participant accepted the cancellation policy.
    status : CharField
        Lifecycle status; only changed through
        :mod:`registrations.lifecycle`.
    """

    class Status(models.TextChoices):
        """
        Enumeration of registration statuses.

        PENDING
            Created, no payment confirmed yet.
        AWAITING_MANUAL_VERIFICATION
            A manual transfer was chosen; staff must confirm receipt.
        CONFIRMED
            Payment verified; the registration holds a capacity slot.
        CANCELLED
            Cancelled by staff.
        """

        PENDING = "pending", "Pending"
        AWAITING_MANUAL_VERIFICATION = (
            "awaiting_manual_verification",
            "Awaiting manual verification",
        )
        CONFIRMED = "confirmed", "Confirmed"
        CANCELLED = "cancelled", "Cancelled"

    class Experience(models.TextChoices):
        ONE_TO_TWO = "1-2 years", "1-2 years"
        THREE_TO_FIVE = "3-5 years", "3-5 years"
        SIX_TO_EIGHT = "6-8 years", "6-8 years"
        MORE_THAN_EIGHT = ">8 years", ">8 years"

    class PlayFrequency(models.TextChoices):
        ONCE = "1 time", "1 time"
        TWO_TO_THREE = "2-3 times", "2-3 times"
        THREE_TO_FOUR = "3-4 times", "3-4 times"
        MORE_THAN_FOUR = ">4 times", ">4 times"

    class BedroomType(models.TextChoices):
        SHARED = "shared", "Shared double room"
        PRIVATE_DOUBLE = "private_double", "Private double bedroom"

    camp = models.ForeignKey(
        Camp,
        on_delete=models.CASCADE,
        related_name="registrations",
        verbose_name="Camp",
    )
    name = models.CharField("Name", max_length=200)
    email = models.EmailField("E-mail")
    whatsapp_number = models.CharField("WhatsApp number", max_length=32)
    tennis_experience_years = models.CharField(
        "Tennis experience", max_length=16, choices=Experience.choices
    )
    play_frequency_per_month = models.CharField(
        "Play frequency per month", max_length=16, choices=PlayFrequency.choices
    )
    bedroom_type = models.CharField(
        "Bedroom type",
        max_length=16,
        choices=BedroomType.choices,
        default=BedroomType.SHARED,
    )
    accepted_cancellation_policy = models.BooleanField(
        "Accepted cancellation policy", default=False
    )
    status = models.CharField(
        "Status",
        max_length=32,
        choices=Status.choices,
        default=Status.PENDING,
    )
    created_at = models.DateTimeField("Created at", auto_now_add=True)
    updated_at = models.DateTimeField("Updated at", auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["camp", "status"], name="registration_camp_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} -> {self.camp} ({self.status})"

    def as_dict(self, *, related: bool = False) -> dict:
        """
        Return the JSON representation used by the API.

        Parameters
        ----------
        related : bool
            Include ``options`` and ``payments``.
        """
        data = {
            "id": self.pk,
            "camp_id": self.camp_id,
            "name": self.name,
            "email": self.email,
            "whatsapp_number": self.whatsapp_number,
            "tennis_experience_years": self.tennis_experience_years,
            "play_frequency_per_month": self.play_frequency_per_month,
            "bedroom_type": self.bedroom_type,
            "accepted_cancellation_policy": self.accepted_cancellation_policy,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if related:
            data["options"] = [o.as_dict() for o in self.options.all()]
            data["payments"] = [p.as_dict() for p in self.payments.all()]
        return data


class RegistrationOption(models.Model):
    """
    Priced add-on attached to a registration.

    The price is copied from the fixed price table in
    :mod:`registrations.pricing` when the option is stored.

    Attributes
    ----------
    registration : ForeignKey
        The owning registration.
    option_type : CharField
        Which add-on (see :class:`OptionType`).
    price : DecimalField
        Price in pounds at the time the option was chosen.
    """

    class OptionType(models.TextChoices):
        HAMMAM_MASSAGE = "hammam_massage", "Hammam & massage"
        MASSAGE = "massage", "Massage"
        HAMMAM = "hammam", "Hammam"
        MEDINA_TOUR = "medina_tour", "Medina tour"
        FRIDAY_DINNER = "friday_dinner", "Friday dinner"

    registration = models.ForeignKey(
        Registration,
        on_delete=models.CASCADE,
        related_name="options",
    )
    option_type = models.CharField("Option", max_length=32, choices=OptionType.choices)
    price = models.DecimalField("Price (£)", max_digits=8, decimal_places=2)

    class Meta:
        unique_together = ("registration", "option_type")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.get_option_type_display()} ({self.price}£)"

    def as_dict(self) -> dict:
        return {
            "id": self.pk,
            "option_type": self.option_type,
            "price": self.price,
        }
