"""Promotion domain models.

Promotion codes are stored uppercase, so lookups by normalized code are
case-insensitive. Money is Decimal in the major currency unit.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from core.money import ZERO, round2


def normalize_promotion_code(code: str | None) -> str:
    """Trim and uppercase a promo code. None becomes the empty string."""
    return (code or "").strip().upper()


class PromotionType(str, Enum):
    """How a promotion discount is computed."""

    PERCENTAGE = "percentage"  # value is a percent of the subtotal
    FIXED = "fixed"            # value is a money amount


class Promotion(BaseModel):
    """Promotion as stored. Read-only to pricing; usage_count is bumped at booking commit."""

    id: UUID
    code: str
    type: PromotionType
    value: Decimal = ZERO
    min_purchase_amount: Decimal | None = None
    max_discount_amount: Decimal | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    usage_limit: int | None = Field(None, ge=0)
    usage_count: int = Field(0, ge=0)
    is_active: bool = False
    location_id: UUID | None = None

    model_config = {"from_attributes": True}

    @field_validator("code")
    @classmethod
    def uppercase_code(cls, v: str) -> str:
        return normalize_promotion_code(v)

    @field_validator("value", "usage_count", mode="before")
    @classmethod
    def null_as_zero(cls, v):
        return 0 if v is None else v

    @field_validator("is_active", mode="before")
    @classmethod
    def null_as_inactive(cls, v):
        return False if v is None else v

    @property
    def is_location_scoped(self) -> bool:
        return self.location_id is not None

    @property
    def has_usage_remaining(self) -> bool:
        return self.usage_limit is None or self.usage_count < self.usage_limit


class PromotionEvaluation(BaseModel):
    """Outcome of pricing a promo code against a subtotal."""

    promotion_id: UUID | None = None
    discount_amount: Decimal = ZERO

    @field_validator("discount_amount")
    @classmethod
    def round_discount(cls, v: Decimal) -> Decimal:
        return round2(v)

    @classmethod
    def none(cls) -> "PromotionEvaluation":
        """No promotion applied."""
        return cls()

    @property
    def applied(self) -> bool:
        return self.promotion_id is not None
