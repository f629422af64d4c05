"""Core domain models."""

from core.models.pricing import PricingInput, PricingResult, LocationType
from core.models.promotion import (
    Promotion, PromotionType, PromotionEvaluation, normalize_promotion_code,
)
from core.models.fee_config import FeeConfig, FeeType, PlatformFeeSettings, PlatformFeeType, ServiceFee
from core.models.provider import ProviderFeeProfile, LoyaltyRule
from core.models.catalog import Offering, ServiceAddon, Product, ServicePackage
from core.models.quote import BookingDraft, BookingItem, BookingProduct, CustomOfferDraft

__all__ = [
    # Pricing
    "PricingInput", "PricingResult", "LocationType",
    # Promotion
    "Promotion", "PromotionType", "PromotionEvaluation", "normalize_promotion_code",
    # Fees
    "FeeConfig", "FeeType", "PlatformFeeSettings", "PlatformFeeType", "ServiceFee",
    # Provider
    "ProviderFeeProfile", "LoyaltyRule",
    # Catalog
    "Offering", "ServiceAddon", "Product", "ServicePackage",
    # Quotes
    "BookingDraft", "BookingItem", "BookingProduct", "CustomOfferDraft",
]
