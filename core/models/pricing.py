"""Pricing input and result models.

Money is Decimal in the major currency unit, quantized to cents on the
way in. PricingInput deliberately accepts negative amounts: the engine
clamps them to zero instead of rejecting the booking.
"""

from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from core.money import ZERO, round2


class LocationType(str, Enum):
    """Where the service is performed."""

    AT_SALON = "at_salon"
    AT_HOME = "at_home"


class PricingInput(BaseModel):
    """One booking or custom-offer pricing attempt. Built fresh per attempt."""

    base_price: Decimal
    travel_fee: Decimal = ZERO
    currency: str = Field(..., min_length=3, max_length=3)
    provider_id: UUID
    customer_id: UUID
    tip_amount: Decimal | None = None
    promotion_code: str | None = None
    location_type: LocationType
    location_id: UUID | None = None

    model_config = {"frozen": True}

    @field_validator("base_price", "travel_fee", "tip_amount")
    @classmethod
    def round_money(cls, v: Decimal | None) -> Decimal | None:
        return None if v is None else round2(v)

    @field_validator("currency")
    @classmethod
    def uppercase_currency(cls, v: str) -> str:
        return v.upper()


class PricingResult(BaseModel):
    """
    Full price breakdown for a booking or offer.

    Output only. The caller persists it with the booking record and commits
    promotion usage separately.

    total_amount == subtotal_after_discount + tax_amount + service_fee_amount + tip_amount
    commission_base == subtotal_after_discount
    """

    subtotal: Decimal  # before discount
    travel_fee: Decimal
    promotion_id: UUID | None = None
    promotion_code: str | None = None
    promotion_discount_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    subtotal_after_discount: Decimal
    tax_rate: Decimal = ZERO
    tax_amount: Decimal = ZERO
    service_fee_percentage: Decimal = ZERO
    service_fee_amount: Decimal = ZERO
    service_fee_config_id: UUID | None = None
    tip_amount: Decimal = ZERO
    total_amount: Decimal
    commission_base: Decimal
    currency: str
    loyalty_points_earned: int = 0

    @property
    def pass_through_amount(self) -> Decimal:
        """Tax, platform fee and tip: charged to the customer, excluded from commission."""
        return self.tax_amount + self.service_fee_amount + self.tip_amount
