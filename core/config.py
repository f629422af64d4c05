"""Hard-coded last layer of every pricing fallback chain."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class PricingConfig(BaseModel):
    """
    Pricing defaults used when neither the provider nor the platform
    settings row configures a value.

    Percentages are whole percents (15 = 15%), money is in the major
    currency unit.
    """

    default_tax_rate_percent: Decimal = Field(
        default=Decimal("0"),
        description="Tax rate when no provider or platform rate is set",
        ge=0,
        le=100,
    )

    default_service_fee_type: Literal["percentage", "fixed"] = Field(
        default="percentage",
        description="Platform service fee type when platform settings are missing",
    )
    default_service_fee_percentage: Decimal = Field(
        default=Decimal("0"),
        description="Platform service fee percentage when platform settings are missing",
        ge=0,
        le=100,
    )
    default_service_fee_fixed: Decimal = Field(
        default=Decimal("0"),
        description="Platform fixed service fee when platform settings are missing",
        ge=0,
    )

    default_currency: str = Field(
        default="ZAR",
        description="Currency used when neither the request nor the provider sets one",
        min_length=3,
        max_length=3,
    )
    tips_enabled_default: bool = Field(
        default=True,
        description="Tip toggle for providers that never set one",
    )

    model_config = {"frozen": True}
