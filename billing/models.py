# billing/models.py
"""
Database models for the billing application.

This module defines the Payment model. A registration may have
several payments: a deposit then the balance, or a retry after an
abandoned checkout.
"""

from django.db import models
from django.utils import timezone

from registrations.models import Registration


class Payment(models.Model):
    """
    Payment attempt for a registration.

    Attributes
    ----------
    registration : ForeignKey
        The registration being paid for.
    method : CharField
        Card (hosted checkout) or manual bank transfer.
    payment_type : CharField
        Deposit or full payment.
    amount : DecimalField
        Amount charged, in ``currency``.
    base_camp_price, bedroom_upgrade_price, options_total_price
        Price breakdown at the time the payment was started.
    provider_session_id : CharField
        Checkout session identifier at the card provider.
    provider_payment_intent_id : CharField
        Payment intent identifier at the card provider, once known.
    status : CharField
        ``pending`` then ``completed`` or ``failed``; never goes back.
    transfer_reported_at : DateTimeField
        When the registrant reported a manual transfer as sent.
    completed_at : DateTimeField
        When the payment was marked completed.
    """

    class Method(models.TextChoices):
        CARD = "card", "Card"
        MANUAL_TRANSFER = "manual_transfer", "Manual transfer"

    class Type(models.TextChoices):
        DEPOSIT = "deposit", "Deposit"
        FULL = "full", "Full payment"

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"

    registration = models.ForeignKey(
        Registration,
        on_delete=models.CASCADE,
        related_name="payments",
        verbose_name="Registration",
    )
    method = models.CharField("Method", max_length=16, choices=Method.choices)
    payment_type = models.CharField("Type", max_length=16, choices=Type.choices)
    amount = models.DecimalField("Amount", max_digits=8, decimal_places=2)
    currency = models.CharField("Currency", max_length=3, default="gbp")
    base_camp_price = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    bedroom_upgrade_price = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    options_total_price = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    provider_session_id = models.CharField(max_length=255, null=True, blank=True, unique=True)
    provider_payment_intent_id = models.CharField(
        max_length=255, null=True, blank=True, db_index=True
    )
    status = models.CharField(
        "Status",
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    created_at = models.DateTimeField("Created at", default=timezone.now)
    transfer_reported_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField("Completed at", null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Payment #{self.pk} - {self.registration_id} - {self.amount} ({self.status})"

    def as_dict(self) -> dict:
        return {
            "id": self.pk,
            "registration_id": self.registration_id,
            "payment_method": self.method,
            "payment_type": self.payment_type,
            "amount": self.amount,
            "currency": self.currency,
            "status": self.status,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
        }
