# billing/exceptions.py
"""
Custom exceptions for the billing application.

This module defines domain-specific exceptions used for
error handling around payments and the card payment provider.
"""


class BillingError(Exception):
    """
    Base class for billing-related errors.

    All billing exceptions inherit from this class to allow
    grouped exception handling.
    """


class PaymentError(BillingError):
    """
    Raised when a payment cannot be started or recorded.

    Typically a bad method or type, or a registration that can no
    longer be paid.
    """


class PaymentProviderError(BillingError):
    """
    Raised when a call to the payment provider fails.

    Used for network errors, authentication failures and missing
    provider configuration.
    """


class PaymentRecordError(BillingError):
    """
    Raised when the local payment row cannot be stored.

    When this follows a successful checkout session creation the
    provider session is left orphaned; it is logged for staff.
    """


class WebhookSignatureError(BillingError):
    """
    Raised when a provider webhook cannot be authenticated.

    Covers a missing signature header, a missing shared secret, an
    invalid signature and an undecodable payload.
    """


class ReconciliationError(BillingError):
    """Raised when a provider session cannot be tied to a registration."""
