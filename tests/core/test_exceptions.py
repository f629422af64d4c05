"""Tests for pricing exceptions."""

from decimal import Decimal

from core.exceptions import ConfigLookupError, MinimumOrderNotMetError, PricingError


class TestConfigLookupError:
    def test_default_message_names_source(self):
        exc = ConfigLookupError("promotions")
        assert exc.source == "promotions"
        assert "promotions" in str(exc)
        assert isinstance(exc, PricingError)

    def test_custom_message(self):
        assert str(ConfigLookupError("providers", "boom")) == "boom"


class TestMinimumOrderNotMetError:
    def test_message(self):
        exc = MinimumOrderNotMetError(Decimal("350"), Decimal("120.5"), "ZAR")
        assert str(exc) == (
            "Minimum order amount for house calls is 350.00 ZAR. "
            "Your current order is 120.50 ZAR."
        )

    def test_is_value_error(self):
        assert isinstance(MinimumOrderNotMetError(Decimal("1"), Decimal("0"), "ZAR"), ValueError)
