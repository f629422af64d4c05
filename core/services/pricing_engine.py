"""
Booking pricing engine.

Turns a PricingInput into a PricingResult. The steps run in a fixed
order because tax and service fee are both computed on the post-discount
subtotal:

1. subtotal = max(0, base_price) + max(0, travel_fee)
2. tip (forced to 0 when the provider disabled tips)
3. promotion discount against the pre-discount subtotal
4. subtotal after discount
5. tax on the post-discount subtotal
6. service fee on the post-discount subtotal
7. total
8. commission base = post-discount subtotal (tax, fee and tip excluded)

The engine is stateless and read-only. Configuration lookup failures
propagate as ConfigLookupError; there are no partial results.
"""

import logging
from datetime import datetime

from core.config import PricingConfig
from core.models import PricingInput, PricingResult, ProviderFeeProfile, normalize_promotion_code
from core.money import ZERO, floor_int, non_negative, percent_of, round2
from core.services.promotion_evaluator import PromotionEvaluator
from core.services.service_fee_resolver import ServiceFeeResolver
from core.services.tax_rate_resolver import TaxRateResolver

logger = logging.getLogger(__name__)


class PricingEngine:
    """Composes tax, promotion and service fee resolution into a final price."""

    def __init__(self, config_service, config: PricingConfig | None = None):
        self.config_service = config_service
        self.config = config or PricingConfig()
        self.tax_rates = TaxRateResolver(config_service, self.config)
        self.promotions = PromotionEvaluator(config_service)
        self.service_fees = ServiceFeeResolver(config_service, self.config)

    def _provider_profile(self, pricing_input: PricingInput) -> ProviderFeeProfile:
        profile = self.config_service.get_provider_fee_profile(pricing_input.provider_id)
        if profile is None:
            logger.warning(f"No fee profile for provider {pricing_input.provider_id}, using defaults")
            return ProviderFeeProfile(provider_id=pricing_input.provider_id)
        return profile

    def compute(
        self,
        pricing_input: PricingInput,
        now: datetime | None = None,
        profile: ProviderFeeProfile | None = None,
    ) -> PricingResult:
        """
        Compute the full price breakdown.

        Args:
            pricing_input: Booking or custom-offer pricing input
            now: Promotion evaluation time (defaults to current UTC time)
            profile: Provider profile already read by the caller. Read here
                when omitted.

        Returns:
            PricingResult fit to charge

        Raises:
            ConfigLookupError: If any configuration or promotion read fails
        """
        if profile is None:
            profile = self._provider_profile(pricing_input)

        base_price = non_negative(pricing_input.base_price)
        travel_fee = non_negative(pricing_input.travel_fee)
        subtotal = base_price + travel_fee

        tips_enabled = profile.tips_enabled
        if tips_enabled is None:
            tips_enabled = self.config.tips_enabled_default
        tip_amount = non_negative(pricing_input.tip_amount or ZERO) if tips_enabled else ZERO

        promotion = self.promotions.evaluate(
            pricing_input.promotion_code,
            subtotal,
            pricing_input.location_type,
            pricing_input.location_id,
            now=now,
        )
        subtotal_after_discount = max(ZERO, subtotal - promotion.discount_amount)

        tax_rate = self.tax_rates.resolve(pricing_input.provider_id, profile.tax_rate_percent)
        tax_amount = percent_of(subtotal_after_discount, tax_rate) if tax_rate > 0 else ZERO

        service_fee = self.service_fees.resolve(profile.fee_config_id, subtotal_after_discount)

        total_amount = round2(
            subtotal_after_discount + tax_amount + service_fee.amount + tip_amount
        )

        loyalty_points = 0
        loyalty_rule = self.config_service.get_loyalty_rule(pricing_input.currency)
        if loyalty_rule is not None:
            loyalty_points = floor_int(total_amount * loyalty_rule.points_per_currency_unit)

        result = PricingResult(
            subtotal=subtotal,
            travel_fee=travel_fee,
            promotion_id=promotion.promotion_id,
            promotion_code=normalize_promotion_code(pricing_input.promotion_code) if promotion.applied else None,
            promotion_discount_amount=promotion.discount_amount,
            discount_amount=promotion.discount_amount,
            subtotal_after_discount=subtotal_after_discount,
            tax_rate=tax_rate,
            tax_amount=tax_amount,
            service_fee_percentage=service_fee.percentage,
            service_fee_amount=service_fee.amount,
            service_fee_config_id=service_fee.fee_config_id,
            tip_amount=tip_amount,
            total_amount=total_amount,
            commission_base=subtotal_after_discount,
            currency=pricing_input.currency,
            loyalty_points_earned=loyalty_points,
        )

        logger.info(
            f"Priced booking for provider {pricing_input.provider_id}: "
            f"total {result.total_amount} {result.currency}, "
            f"promotion {'applied' if promotion.applied else 'none'}"
        )

        return result
