"""
Helpers shared by the registration and billing tests.
"""

from datetime import date

from camps.models import Camp
from registrations.models import Registration, RegistrationOption
from registrations.pricing import option_price


def make_camp(capacity=7, **kwargs) -> Camp:
    values = dict(start_date=date(2026, 3, 5), end_date=date(2026, 3, 9), capacity=capacity)
    values.update(kwargs)
    return Camp.objects.create(**values)


def registration_payload(**overrides) -> dict:
    """Valid JSON body for the registration endpoint."""
    data = {
        "name": "Ana Ivanovic",
        "email": "ana@example.com",
        "whatsapp_number": "+447700900123",
        "tennis_experience_years": "3-5 years",
        "play_frequency_per_month": "2-3 times",
        "bedroom_type": "shared",
        "accepted_cancellation_policy": True,
        "optional_activities": [],
    }
    data.update(overrides)
    return data


def make_registration(camp, status=Registration.Status.PENDING, options=(), **kwargs):
    values = dict(
        name="Player",
        email="player@example.com",
        whatsapp_number="+447700900000",
        tennis_experience_years=Registration.Experience.THREE_TO_FIVE,
        play_frequency_per_month=Registration.PlayFrequency.TWO_TO_THREE,
        bedroom_type=Registration.BedroomType.SHARED,
        accepted_cancellation_policy=True,
    )
    values.update(kwargs)
    registration = Registration.objects.create(camp=camp, status=status, **values)
    for option_type in options:
        RegistrationOption.objects.create(
            registration=registration, option_type=option_type, price=option_price(option_type)
        )
    return registration


def fill_camp(camp, count, status=Registration.Status.CONFIRMED):
    return [
        make_registration(camp, status=status, email=f"p{i}@example.com") for i in range(count)
    ]
