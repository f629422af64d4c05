"""Provider pricing profile and loyalty rule models."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class ProviderFeeProfile(BaseModel):
    """
    Snapshot of the provider columns pricing depends on.

    Re-read for every computation so configuration changes apply to the
    next booking attempt. tips_enabled is None when the provider never set it.
    """

    provider_id: UUID
    currency: str | None = None
    tax_rate_percent: Decimal | None = None
    tips_enabled: bool | None = None
    fee_config_id: UUID | None = None
    minimum_mobile_booking_amount: Decimal | None = None

    model_config = {"from_attributes": True}


class LoyaltyRule(BaseModel):
    """Active loyalty earning rule for one currency."""

    currency: str
    points_per_currency_unit: Decimal = Field(..., ge=0)

    model_config = {"from_attributes": True}
