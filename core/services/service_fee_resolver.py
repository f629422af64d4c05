"""
Customer-facing platform service fee.

Layers, tried in order:
1. Provider fee config (active, subtotal at or above its minimum)
2. Platform settings (payouts.platform_service_fee_*), no minimum check
3. Hard-coded PricingConfig defaults when no platform settings row exists

The platform layer is consulted whenever the provider layer produces a
fee of exactly zero, whatever the reason.
"""

import logging
from decimal import Decimal
from uuid import UUID

from core.config import PricingConfig
from core.models import FeeConfig, FeeType, PlatformFeeSettings, PlatformFeeType, ServiceFee
from core.money import ZERO, non_negative, percent_of, round2

logger = logging.getLogger(__name__)


def provider_fee(fee_config: FeeConfig, subtotal: Decimal) -> ServiceFee:
    """Fee from a provider's own config; zero below its minimum booking amount."""
    if subtotal < fee_config.minimum:
        return ServiceFee(fee_config_id=fee_config.id)

    if fee_config.fee_type == FeeType.PERCENTAGE:
        percentage = fee_config.fee_percentage or ZERO
        amount = percent_of(subtotal, percentage)
        if fee_config.max_fee_amount is not None:
            amount = min(amount, round2(fee_config.max_fee_amount))
        return ServiceFee(
            percentage=max(ZERO, percentage),
            amount=max(ZERO, amount),
            fee_config_id=fee_config.id,
        )

    return ServiceFee(
        amount=non_negative(fee_config.fee_fixed_amount or ZERO),
        fee_config_id=fee_config.id,
    )


def platform_fee(settings: PlatformFeeSettings, subtotal: Decimal) -> ServiceFee:
    """Fee from platform-wide settings."""
    if settings.fee_type == PlatformFeeType.PERCENTAGE:
        return ServiceFee(
            percentage=settings.percentage,
            amount=percent_of(subtotal, settings.percentage),
        )
    return ServiceFee(amount=round2(settings.fixed_amount))


class ServiceFeeResolver:
    """Resolves the service fee for a post-discount subtotal."""

    def __init__(self, config_service, config: PricingConfig | None = None):
        self.config_service = config_service
        self.config = config or PricingConfig()

    def _fallback_settings(self) -> PlatformFeeSettings:
        return PlatformFeeSettings(
            fee_type=self.config.default_service_fee_type,
            percentage=self.config.default_service_fee_percentage,
            fixed_amount=self.config.default_service_fee_fixed,
        )

    def resolve(self, fee_config_id: UUID | None, subtotal_after_discount: Decimal) -> ServiceFee:
        """
        Resolve the service fee.

        Args:
            fee_config_id: Provider's fee config reference, if any
            subtotal_after_discount: Fee base (post-promotion subtotal)

        Returns:
            ServiceFee with the percentage used (0 for fixed fees) and the
            rounded amount. Never negative.

        Raises:
            ConfigLookupError: If a fee configuration read fails
        """
        subtotal = max(ZERO, round2(subtotal_after_discount))

        if fee_config_id is not None:
            fee_config = self.config_service.get_fee_config(fee_config_id)
            if fee_config is not None:
                fee = provider_fee(fee_config, subtotal)
                if fee.amount != ZERO:
                    logger.debug(f"Service fee from provider config {fee_config_id}: {fee.amount}")
                    return fee
                logger.debug(f"Provider fee config {fee_config_id} yields zero, falling back to platform")
            else:
                logger.debug(f"Fee config {fee_config_id} missing or inactive, falling back to platform")

        settings = self.config_service.get_platform_fee_settings()
        if settings is None:
            logger.debug("No platform settings row, using hard-coded fee defaults")
            settings = self._fallback_settings()

        fee = platform_fee(settings, subtotal)
        return fee.model_copy(update={
            "percentage": max(ZERO, fee.percentage),
            "amount": max(ZERO, fee.amount),
        })
