"""Catalog rows a booking is priced from.

Prices always come from these stored rows, never from the client's draft.
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, field_validator

from core.money import ZERO


class Offering(BaseModel):
    """Bookable service."""

    id: UUID
    provider_id: UUID
    price: Decimal = ZERO
    at_home_price_adjustment: Decimal = ZERO
    supports_at_home: bool | None = None
    is_active: bool = False

    model_config = {"from_attributes": True}

    @field_validator("price", "at_home_price_adjustment", mode="before")
    @classmethod
    def null_as_zero(cls, v):
        return 0 if v is None else v


class ServiceAddon(BaseModel):
    """Optional extra on top of booked services."""

    id: UUID
    provider_id: UUID
    price: Decimal = ZERO
    is_active: bool = False

    model_config = {"from_attributes": True}

    @field_validator("price", mode="before")
    @classmethod
    def null_as_zero(cls, v):
        return 0 if v is None else v


class Product(BaseModel):
    """Retail product sold with a booking."""

    id: UUID
    provider_id: UUID
    name: str = ""
    retail_price: Decimal = ZERO
    is_active: bool = False
    track_stock_quantity: bool = False
    quantity: int | None = None

    model_config = {"from_attributes": True}

    @field_validator("retail_price", mode="before")
    @classmethod
    def null_as_zero(cls, v):
        return 0 if v is None else v

    @field_validator("track_stock_quantity", mode="before")
    @classmethod
    def null_as_untracked(cls, v):
        return False if v is None else v

    @property
    def units_in_stock(self) -> int:
        return self.quantity or 0


class ServicePackage(BaseModel):
    """
    Bundle of services sold below their combined price.

    A set package price wins over discount_percentage. The discount only
    ever applies to the services part of a booking.
    """

    id: UUID
    provider_id: UUID
    price: Decimal | None = None
    discount_percentage: Decimal | None = None
    location_ids: list[UUID] = []

    model_config = {"from_attributes": True}

    def available_at(self, location_id: UUID | None) -> bool:
        """Packages with no location rows are available everywhere."""
        return not self.location_ids or location_id in self.location_ids
