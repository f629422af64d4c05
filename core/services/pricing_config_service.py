"""
Read-only lookups for everything pricing depends on.

Provider fee profiles, fee configs, platform settings, promotions, catalog
rows and loyalty rules are read point-in-time on every call; nothing is cached, so
configuration changes apply to the next booking attempt. Any database
failure surfaces as ConfigLookupError and is never retried here.
"""

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Any
from uuid import UUID

import psycopg2

from clients.postgres_client import PostgresClient
from core.exceptions import ConfigLookupError
from core.models import (
    FeeConfig,
    LoyaltyRule,
    Offering,
    PlatformFeeSettings,
    Product,
    Promotion,
    ProviderFeeProfile,
    ServiceAddon,
    ServicePackage,
    normalize_promotion_code,
)

logger = logging.getLogger(__name__)


@contextmanager
def _lookup(source: str):
    """Translate driver errors into ConfigLookupError for the named source."""
    try:
        yield
    except psycopg2.Error as exc:
        logger.error(f"Pricing configuration lookup failed ({source}): {exc}")
        raise ConfigLookupError(source) from exc


class PricingConfigService:
    """Service for pricing configuration reads."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def get_provider_fee_profile(self, provider_id: UUID) -> ProviderFeeProfile | None:
        """
        Get the pricing-relevant provider columns.

        Returns:
            ProviderFeeProfile, or None if the provider does not exist.
        """
        with _lookup("providers"):
            row = self.postgres.execute_single(
                """
                SELECT id AS provider_id, currency, tax_rate_percent, tips_enabled,
                       customer_fee_config_id AS fee_config_id,
                       minimum_mobile_booking_amount
                FROM providers
                WHERE id = %s
                """,
                (provider_id,)
            )

        if row is None:
            return None

        return ProviderFeeProfile.model_validate(row)

    def get_fee_config(self, fee_config_id: UUID) -> FeeConfig | None:
        """Get an active fee config by ID. Inactive configs read as missing."""
        with _lookup("platform_fee_config"):
            row = self.postgres.execute_single(
                """
                SELECT id, fee_type, fee_percentage, fee_fixed_amount,
                       min_booking_amount, max_fee_amount, is_active
                FROM platform_fee_config
                WHERE id = %s AND is_active = true
                """,
                (fee_config_id,)
            )

        if row is None:
            return None

        return FeeConfig.model_validate(row)

    def _get_platform_settings(self) -> dict[str, Any] | None:
        """Newest active platform settings document."""
        with _lookup("platform_settings"):
            row = self.postgres.execute_single(
                """
                SELECT settings FROM platform_settings
                WHERE is_active = true
                ORDER BY created_at DESC
                LIMIT 1
                """
            )

        if row is None or not row.get("settings"):
            return None

        return row["settings"]

    def get_platform_fee_settings(self) -> PlatformFeeSettings | None:
        """
        Platform-wide service fee from settings.payouts.

        Returns:
            PlatformFeeSettings, or None if no active settings row exists.
            Keys missing from the row take the model defaults.
        """
        settings = self._get_platform_settings()
        if settings is None:
            return None

        payouts = settings.get("payouts") or {}
        values = {
            "fee_type": payouts.get("platform_service_fee_type"),
            "percentage": payouts.get("platform_service_fee_percentage"),
            "fixed_amount": payouts.get("platform_service_fee_fixed"),
        }
        return PlatformFeeSettings.model_validate(
            {k: v for k, v in values.items() if v is not None}
        )

    def get_platform_default_tax_rate(self) -> Decimal | None:
        """Platform default tax rate percent, or None if not configured."""
        settings = self._get_platform_settings()
        if settings is None:
            return None

        rate = (settings.get("taxes") or {}).get("default_tax_rate_percent")
        if rate is None:
            return None

        return Decimal(str(rate))

    def get_promotion_by_code(self, code: str) -> Promotion | None:
        """
        Get promotion by exact normalized code.

        Args:
            code: Promo code as typed by the customer

        Returns:
            Promotion if one matches, None otherwise. Eligibility is not checked.
        """
        normalized = normalize_promotion_code(code)
        if not normalized:
            return None

        with _lookup("promotions"):
            row = self.postgres.execute_single(
                """
                SELECT id, code, type, value, min_purchase_amount, max_discount_amount,
                       valid_from, valid_until, usage_limit, usage_count, is_active, location_id
                FROM promotions
                WHERE code = %s
                """,
                (normalized,)
            )

        if row is None:
            return None

        return Promotion.model_validate(row)

    # =========================================================================
    # CATALOG
    # =========================================================================

    def get_offerings(self, offering_ids: list[UUID]) -> dict[UUID, Offering]:
        """Offerings by ID. IDs with no row are absent from the result."""
        if not offering_ids:
            return {}

        with _lookup("offerings"):
            rows = self.postgres.execute(
                """
                SELECT id, provider_id, price, at_home_price_adjustment,
                       supports_at_home, is_active
                FROM offerings
                WHERE id = ANY(%s::uuid[])
                """,
                (list(offering_ids),)
            )

        return {o.id: o for o in (Offering.model_validate(row) for row in rows)}

    def get_addons(self, addon_ids: list[UUID]) -> dict[UUID, ServiceAddon]:
        """Service add-ons by ID."""
        if not addon_ids:
            return {}

        with _lookup("service_addons"):
            rows = self.postgres.execute(
                """
                SELECT id, provider_id, price, is_active
                FROM service_addons
                WHERE id = ANY(%s::uuid[])
                """,
                (list(addon_ids),)
            )

        return {a.id: a for a in (ServiceAddon.model_validate(row) for row in rows)}

    def get_products(self, product_ids: list[UUID]) -> dict[UUID, Product]:
        """Retail products by ID."""
        if not product_ids:
            return {}

        with _lookup("products"):
            rows = self.postgres.execute(
                """
                SELECT id, provider_id, name, retail_price, is_active,
                       track_stock_quantity, quantity
                FROM products
                WHERE id = ANY(%s::uuid[])
                """,
                (list(product_ids),)
            )

        return {p.id: p for p in (Product.model_validate(row) for row in rows)}

    def get_service_package(self, package_id: UUID) -> ServicePackage | None:
        """Service package with the locations it is restricted to (empty = everywhere)."""
        with _lookup("service_packages"):
            row = self.postgres.execute_single(
                """
                SELECT p.id, p.provider_id, p.price, p.discount_percentage,
                       COALESCE(
                           array_agg(pl.location_id::text) FILTER (WHERE pl.location_id IS NOT NULL),
                           '{}'::text[]
                       ) AS location_ids
                FROM service_packages p
                LEFT JOIN package_locations pl ON pl.package_id = p.id
                WHERE p.id = %s
                GROUP BY p.id
                """,
                (package_id,)
            )

        if row is None:
            return None

        return ServicePackage.model_validate(row)

    def get_loyalty_rule(self, currency: str) -> LoyaltyRule | None:
        """Most recently effective active loyalty rule for a currency."""
        with _lookup("loyalty_rules"):
            row = self.postgres.execute_single(
                """
                SELECT currency, points_per_currency_unit
                FROM loyalty_rules
                WHERE is_active = true AND currency = %s
                ORDER BY effective_from DESC
                LIMIT 1
                """,
                (currency,)
            )

        if row is None or row.get("points_per_currency_unit") is None:
            return None

        return LoyaltyRule.model_validate(row)
