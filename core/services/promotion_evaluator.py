"""
Promo code evaluation.

Prices a promo code against the pre-discount subtotal. An unknown or
ineligible code is not an error: it yields no discount and checkout
proceeds at full price. Evaluation is a point-in-time preview; usage
counts are committed atomically by the booking confirmation step, which
is the only place a usage_limit race can be caught.
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from core.models import (
    LocationType,
    Promotion,
    PromotionEvaluation,
    PromotionType,
    normalize_promotion_code,
)
from core.money import ZERO, clamp, percent_of, round2
from utils.timezone import now_utc, within_window

logger = logging.getLogger(__name__)


def ineligibility_reason(
    promotion: Promotion,
    subtotal: Decimal,
    location_type: LocationType,
    location_id: UUID | None,
    now: datetime,
) -> str | None:
    """
    Check every eligibility rule.

    Returns:
        None when the promotion applies, otherwise the first failing rule.
    """
    if not promotion.is_active:
        return "inactive"
    if not within_window(now, promotion.valid_from, promotion.valid_until):
        return "outside validity window"
    if not promotion.has_usage_remaining:
        return "usage limit reached"
    if promotion.min_purchase_amount is not None and subtotal < promotion.min_purchase_amount:
        return "below minimum purchase"
    if promotion.is_location_scoped and not (
        location_type == LocationType.AT_SALON and location_id == promotion.location_id
    ):
        return "not valid for this location"
    return None


def discount_for(promotion: Promotion, subtotal: Decimal) -> Decimal:
    """Discount an eligible promotion gives on subtotal, within [0, subtotal]."""
    if promotion.type == PromotionType.PERCENTAGE:
        discount = percent_of(subtotal, promotion.value)
    else:
        discount = round2(promotion.value)

    if promotion.max_discount_amount is not None:
        discount = min(discount, round2(promotion.max_discount_amount))

    return clamp(discount, ZERO, subtotal)


class PromotionEvaluator:
    """Validates and prices promo codes."""

    def __init__(self, config_service):
        self.config_service = config_service

    def evaluate(
        self,
        code: str | None,
        subtotal_before_discount: Decimal,
        location_type: LocationType,
        location_id: UUID | None = None,
        now: datetime | None = None,
    ) -> PromotionEvaluation:
        """
        Price a promo code.

        Args:
            code: Code as entered; trimmed and uppercased before lookup
            subtotal_before_discount: Base price plus travel fee
            location_type: Booking location type
            location_id: Salon location for at_salon bookings
            now: Evaluation time (defaults to current UTC time)

        Returns:
            PromotionEvaluation; promotion_id is None when nothing applies.

        Raises:
            ConfigLookupError: If the promotion read fails
        """
        normalized = normalize_promotion_code(code)
        if not normalized:
            return PromotionEvaluation.none()

        promotion = self.config_service.get_promotion_by_code(normalized)
        if promotion is None:
            logger.debug(f"Promo code {normalized} not found")
            return PromotionEvaluation.none()

        subtotal = max(ZERO, round2(subtotal_before_discount))
        reason = ineligibility_reason(
            promotion, subtotal, location_type, location_id, now or now_utc()
        )
        if reason is not None:
            logger.debug(f"Promo code {normalized} not applied: {reason}")
            return PromotionEvaluation.none()

        return PromotionEvaluation(
            promotion_id=promotion.id,
            discount_amount=discount_for(promotion, subtotal),
        )
