# registrations/exceptions.py
"""
Custom exceptions for the registrations application.

These exceptions signal the expected failures of the registration
flow (full camp, invalid status change, bad pricing input) so that
views can translate them into client errors.
"""


class RegistrationError(Exception):
    """
    Base class for registration-related errors.

    All custom exceptions of the registrations app inherit from
    this class.
    """


class CampFullError(RegistrationError):
    """
    Raised when a camp has no confirmed-registration slot left.

    Attributes
    ----------
    availability : Availability
        The availability snapshot that caused the rejection.
    """

    def __init__(self, availability):
        super().__init__("Camp is full")
        self.availability = availability


class InvalidTransitionError(RegistrationError):
    """
    Raised when a status change is not allowed from the current status.

    The registration row is left unchanged.

    Attributes
    ----------
    current : str
        The registration's actual status.
    target : str
        The status that was requested.
    """

    def __init__(self, message: str, *, current: str, target: str):
        super().__init__(message)
        self.current = current
        self.target = target


class RegistrationLockedError(RegistrationError):
    """Raised when editing a registration that is no longer pending."""


class PricingError(RegistrationError):
    """Raised for an unknown add-on or payment type."""
