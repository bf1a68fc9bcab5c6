# camps/models.py
"""
Database models for the camps application.

This module defines the Camp and CampPlayer models.
A camp is a scheduled, capacity-bounded tennis programme;
camp players form the roster of users attending it.
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class Camp(models.Model):
    """
    Model representing a camp.

    Attributes
    ----------
    start_date : DateField
        First day of the camp.
    end_date : DateField
        Last day of the camp; must be after ``start_date``.
    package : CharField
        Package type offered (tennis only, stay and play, ...).
    total_tennis_hours : PositiveIntegerField
        Optional number of coached hours over the camp.
    accommodation_name, accommodation_details, accommodation_phone,
    accommodation_map_link, accommodation_photo_url
        Optional accommodation information shown to players.
    capacity : PositiveIntegerField
        Optional maximum number of confirmed registrations. When
        unset, ``settings.CAMP_DEFAULT_CAPACITY`` applies.
    coach : ForeignKey
        Optional coach assigned to the camp.
    players : ManyToManyField
        Users on the camp roster, through :class:`CampPlayer`.
    """

    class Package(models.TextChoices):
        TENNIS_ONLY = "tennis_only", "Tennis only"
        STAY_AND_PLAY = "stay_and_play", "Stay & play"
        LUXURY_STAY_AND_PLAY = "luxury_stay_and_play", "Luxury stay & play"
        NO_TENNIS = "no_tennis", "No tennis"

    start_date = models.DateField("Start date")
    end_date = models.DateField("End date")
    package = models.CharField(
        "Package",
        max_length=32,
        choices=Package.choices,
        default=Package.STAY_AND_PLAY,
    )
    total_tennis_hours = models.PositiveIntegerField("Tennis hours", null=True, blank=True)
    accommodation_name = models.CharField("Accommodation", max_length=200, blank=True)
    accommodation_details = models.TextField("Accommodation details", blank=True)
    accommodation_phone = models.CharField("Accommodation phone", max_length=32, blank=True)
    accommodation_map_link = models.URLField("Map link", blank=True)
    accommodation_photo_url = models.URLField("Photo", blank=True)
    capacity = models.PositiveIntegerField("Capacity", null=True, blank=True)
    coach = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="coached_camps",
        verbose_name="Coach",
    )
    players = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="CampPlayer",
        related_name="camps",
        blank=True,
    )
    created_at = models.DateTimeField("Created at", auto_now_add=True)

    class Meta:
        ordering = ["-start_date"]

    def __str__(self) -> str:
        return f"{self.get_package_display()} {self.start_date} → {self.end_date}"

    def clean(self):
        """Reject date ranges where the camp ends before it starts."""
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValidationError({"end_date": "End date must be after start date."})

    @property
    def max_players(self) -> int:
        """Capacity in confirmed registrations, with the configured fallback."""
        return self.capacity or getattr(settings, "CAMP_DEFAULT_CAPACITY", 7)

    @property
    def date_range_label(self) -> str:
        """Human-readable date range, e.g. ``March 5, 2026 - March 9, 2026``."""
        start, end = self.start_date, self.end_date
        return f"{start:%B} {start.day}, {start.year} - {end:%B} {end.day}, {end.year}"


class CampPlayer(models.Model):
    """
    Roster entry tying a player to a camp.

    Attributes
    ----------
    camp : ForeignKey
        The camp attended.
    player : ForeignKey
        The attending user.
    created_at : DateTimeField
        When the player was added to the roster.
    """

    camp = models.ForeignKey(Camp, on_delete=models.CASCADE, related_name="roster")
    player = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="camp_entries",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("camp", "player")
        ordering = ["camp", "player"]

    def __str__(self) -> str:
        return f"{self.player} @ {self.camp}"
