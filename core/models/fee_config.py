"""Platform service fee models.

A provider may point at one fee config; otherwise the platform-wide
settings row applies. Fees are charged to the customer on top of the
service price and never count toward commission.
"""

from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, field_validator

from core.money import ZERO, round2


class FeeType(str, Enum):
    """Fee type on a provider fee config."""

    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


class PlatformFeeType(str, Enum):
    """Fee type in the platform payouts settings."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class FeeConfig(BaseModel):
    """Provider-selectable fee config as stored."""

    id: UUID
    fee_type: FeeType
    fee_percentage: Decimal | None = None
    fee_fixed_amount: Decimal | None = None
    min_booking_amount: Decimal | None = None
    max_fee_amount: Decimal | None = None
    is_active: bool = True

    model_config = {"from_attributes": True}

    @property
    def minimum(self) -> Decimal:
        return self.min_booking_amount if self.min_booking_amount is not None else ZERO


class PlatformFeeSettings(BaseModel):
    """Platform-wide fee fallback, read from platform_settings.settings.payouts."""

    fee_type: PlatformFeeType = PlatformFeeType.PERCENTAGE
    percentage: Decimal = ZERO
    fixed_amount: Decimal = ZERO


class ServiceFee(BaseModel):
    """Resolved customer-facing service fee."""

    percentage: Decimal = ZERO
    amount: Decimal = ZERO
    fee_config_id: UUID | None = None

    @field_validator("amount")
    @classmethod
    def round_amount(cls, v: Decimal) -> Decimal:
        return round2(v)
