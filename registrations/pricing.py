# registrations/pricing.py
"""
Camp pricing.

Prices are fixed: a base camp price for a shared double room, a
surcharge for a private double room, and a price table for the
optional add-ons. Everything here is a pure function of its
arguments and never touches the database.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from .exceptions import PricingError
from .models import Registration, RegistrationOption

#: Camp price with a shared double room (GBP)
BASE_CAMP_PRICE = Decimal("600")

#: Surcharge for a private double bedroom over the whole camp (GBP)
PRIVATE_BEDROOM_UPGRADE = Decimal("90")

#: Fixed amount charged when paying a deposit (GBP)
DEPOSIT_AMOUNT = Decimal("250")

#: Price of each optional add-on (GBP)
OPTION_PRICES = {
    RegistrationOption.OptionType.HAMMAM_MASSAGE.value: Decimal("45"),
    RegistrationOption.OptionType.MASSAGE.value: Decimal("40"),
    RegistrationOption.OptionType.HAMMAM.value: Decimal("25"),
    RegistrationOption.OptionType.MEDINA_TOUR.value: Decimal("30"),
    RegistrationOption.OptionType.FRIDAY_DINNER.value: Decimal("30"),
}

DEPOSIT = "deposit"
FULL = "full"


@dataclass(frozen=True)
class PriceBreakdown:
    """
    Price of a registration, split by component.

    Attributes
    ----------
    base_price : Decimal
        Camp price with a shared room.
    bedroom_upgrade : Decimal
        Private room surcharge, zero for a shared room.
    options_total : Decimal
        Sum of the selected add-ons.
    total : Decimal
        Full price of the registration.
    """

    base_price: Decimal
    bedroom_upgrade: Decimal
    options_total: Decimal
    total: Decimal

    def amount_due(self, payment_type: str) -> Decimal:
        """
        Amount to charge for a payment of the given type.

        A deposit is always the fixed :data:`DEPOSIT_AMOUNT`; a full
        payment is the total.

        Raises
        ------
        PricingError
            If ``payment_type`` is neither ``deposit`` nor ``full``.
        """
        if payment_type == DEPOSIT:
            return DEPOSIT_AMOUNT
        if payment_type == FULL:
            return self.total
        raise PricingError(f"Invalid payment type: {payment_type!r}")

    def as_dict(self) -> dict:
        return {
            "basePrice": self.base_price,
            "bedroomUpgrade": self.bedroom_upgrade,
            "optionsTotal": self.options_total,
            "total": self.total,
        }


def option_price(option_type: str) -> Decimal:
    """
    Look up the fixed price of an add-on.

    Raises
    ------
    PricingError
        If the option type is not in the price table.
    """
    try:
        return OPTION_PRICES[option_type]
    except KeyError:
        raise PricingError(f"Unknown option: {option_type!r}")


def calculate_price(bedroom_type: str, options: Iterable[str] = ()) -> PriceBreakdown:
    """
    Compute the price of a registration.

    Parameters
    ----------
    bedroom_type : str
        ``shared`` or ``private_double``.
    options : iterable of str
        Selected add-on types.

    Returns
    -------
    PriceBreakdown
        The breakdown and its total.
    """
    if bedroom_type == Registration.BedroomType.PRIVATE_DOUBLE:
        upgrade = PRIVATE_BEDROOM_UPGRADE
    else:
        upgrade = Decimal("0")
    options_total = sum((option_price(o) for o in options), Decimal("0"))
    return PriceBreakdown(
        base_price=BASE_CAMP_PRICE,
        bedroom_upgrade=upgrade,
        options_total=options_total,
        total=BASE_CAMP_PRICE + upgrade + options_total,
    )


def price_registration(registration: Registration) -> PriceBreakdown:
    """Price a stored registration from its bedroom type and options."""
    option_types = registration.options.values_list("option_type", flat=True)
    return calculate_price(registration.bedroom_type, option_types)
