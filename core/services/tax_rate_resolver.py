"""
Tax rate resolution.

Provider override, else platform default, else the hard-coded default
(0). Each layer is a nullable lookup; the first non-null value wins.
"""

import logging
from decimal import Decimal
from uuid import UUID

from core.config import PricingConfig

logger = logging.getLogger(__name__)


class TaxRateResolver:
    """Resolves the tax rate percent for a booking."""

    def __init__(self, config_service, config: PricingConfig | None = None):
        self.config_service = config_service
        self.config = config or PricingConfig()

    def resolve(self, provider_id: UUID, provider_override_rate: Decimal | None) -> Decimal:
        """
        Resolve the tax rate for a provider.

        Args:
            provider_id: Provider being booked (for logging)
            provider_override_rate: Provider's own rate; None means not configured.
                An explicit 0 is honored as a zero rate.

        Returns:
            Tax rate as a whole percent (15 = 15%).

        Raises:
            ConfigLookupError: If the platform settings read fails
        """
        if provider_override_rate is not None:
            logger.debug(f"Tax rate for provider {provider_id}: provider override {provider_override_rate}")
            return max(Decimal("0"), Decimal(provider_override_rate))

        platform_rate = self.config_service.get_platform_default_tax_rate()
        if platform_rate is not None:
            logger.debug(f"Tax rate for provider {provider_id}: platform default {platform_rate}")
            return max(Decimal("0"), platform_rate)

        logger.debug(f"Tax rate for provider {provider_id}: no configuration, using fallback")
        return self.config.default_tax_rate_percent
