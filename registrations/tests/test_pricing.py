from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from registrations.exceptions import PricingError
from registrations.pricing import (
    DEPOSIT_AMOUNT,
    calculate_price,
    option_price,
    price_registration,
)
from .utils import make_camp, make_registration


class CalculatePriceTests(SimpleTestCase):
    def test_shared_room_without_options(self):
        self.assertEqual(calculate_price("shared").total, Decimal("600"))

    def test_private_double_adds_upgrade(self):
        breakdown = calculate_price("private_double")
        self.assertEqual(breakdown.bedroom_upgrade, Decimal("90"))
        self.assertEqual(breakdown.total, Decimal("690"))

    def test_options_are_summed(self):
        breakdown = calculate_price("shared", ["hammam", "medina_tour"])
        self.assertEqual(breakdown.options_total, Decimal("55"))
        self.assertEqual(breakdown.total, Decimal("655"))

    def test_deposit_ignores_room_and_options(self):
        for bedroom, options in [
            ("shared", []),
            ("private_double", []),
            ("private_double", ["hammam_massage", "massage", "friday_dinner"]),
        ]:
            with self.subTest(bedroom=bedroom, options=options):
                breakdown = calculate_price(bedroom, options)
                self.assertEqual(breakdown.amount_due("deposit"), DEPOSIT_AMOUNT)
                self.assertEqual(breakdown.amount_due("full"), breakdown.total)

    def test_same_input_same_result(self):
        self.assertEqual(
            calculate_price("private_double", ["massage"]),
            calculate_price("private_double", ["massage"]),
        )

    def test_unknown_option(self):
        with self.assertRaises(PricingError):
            option_price("spa_weekend")

    def test_unknown_payment_type(self):
        with self.assertRaises(PricingError):
            calculate_price("shared").amount_due("half")

    def test_as_dict_keys(self):
        self.assertEqual(
            calculate_price("shared", ["hammam"]).as_dict(),
            {
                "basePrice": Decimal("600"),
                "bedroomUpgrade": Decimal("0"),
                "optionsTotal": Decimal("25"),
                "total": Decimal("625"),
            },
        )


class PriceRegistrationTests(TestCase):
    def test_uses_stored_room_and_options(self):
        registration = make_registration(
            make_camp(),
            bedroom_type="private_double",
            options=["hammam_massage", "friday_dinner"],
        )
        self.assertEqual(price_registration(registration).total, Decimal("765"))
