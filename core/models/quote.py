"""Request bodies for booking and custom-offer price quotes.

Booking drafts carry catalog IDs only. Prices are read from the provider's
catalog when the draft is quoted, so a client cannot set its own price.
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from core.models.pricing import LocationType


class BookingItem(BaseModel):
    """A booked service offering."""

    offering_id: UUID


class BookingProduct(BaseModel):
    """A retail product added to the booking."""

    product_id: UUID
    quantity: int = Field(1, ge=1)


class BookingDraft(BaseModel):
    """Customer booking draft to be priced."""

    provider_id: UUID
    customer_id: UUID
    items: list[BookingItem] = Field(..., min_length=1)
    addons: list[UUID] = Field(default_factory=list)
    products: list[BookingProduct] = Field(default_factory=list)
    package_id: UUID | None = None
    location_type: LocationType
    location_id: UUID | None = None
    travel_fee: Decimal | None = Field(None, ge=0)
    tip_amount: Decimal | None = Field(None, ge=0)
    promotion_code: str | None = Field(None, max_length=64)


class CustomOfferDraft(BaseModel):
    """Provider-authored custom offer to be priced."""

    provider_id: UUID
    customer_id: UUID
    price: Decimal = Field(..., ge=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    location_type: LocationType
    location_id: UUID | None = None
    travel_fee: Decimal | None = Field(None, ge=0)
