"""Typed exceptions for pricing failures."""

from decimal import Decimal


class PricingError(Exception):
    """Base class for booking pricing errors."""


class ConfigLookupError(PricingError):
    """
    A configuration or promotion read failed in the data store.

    Propagated unmodified to the caller; the engine never retries. The
    original database error is chained as __cause__.
    """

    def __init__(self, source: str, message: str | None = None):
        self.source = source
        super().__init__(message or f"Failed to read pricing configuration from {source}")


class MinimumOrderNotMetError(PricingError, ValueError):
    """At-home booking is below the provider's minimum mobile booking amount."""

    def __init__(self, minimum_amount: Decimal, subtotal: Decimal, currency: str):
        self.minimum_amount = minimum_amount
        self.subtotal = subtotal
        self.currency = currency
        super().__init__(
            f"Minimum order amount for house calls is {minimum_amount:.2f} {currency}. "
            f"Your current order is {subtotal:.2f} {currency}."
        )
