"""Shared test fixtures for the pricing test suite."""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from uuid import UUID, uuid4

from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env", override=True)

from core.config import PricingConfig
from core.exceptions import ConfigLookupError
from core.models import (
    FeeConfig,
    LoyaltyRule,
    Offering,
    PlatformFeeSettings,
    PricingInput,
    Product,
    Promotion,
    ProviderFeeProfile,
    ServiceAddon,
    ServicePackage,
    normalize_promotion_code,
)


# =============================================================================
# TEST ID CONSTANTS
# =============================================================================

PROVIDER_ID = UUID("00000000-0000-0000-0000-00000000a001")
CUSTOMER_ID = UUID("00000000-0000-0000-0000-00000000c001")
SALON_LOCATION_ID = UUID("00000000-0000-0000-0000-00000000d001")
OTHER_LOCATION_ID = UUID("00000000-0000-0000-0000-00000000d002")

# Fixed evaluation time so promotion windows are deterministic
NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# IN-MEMORY CONFIG SOURCE
# =============================================================================


class FakePricingConfigService:
    """
    In-memory stand-in for PricingConfigService.

    Same read interface; set `failing` to a source name to make that
    lookup raise ConfigLookupError.
    """

    def __init__(self):
        self.providers: dict[UUID, ProviderFeeProfile] = {}
        self.fee_configs: dict[UUID, FeeConfig] = {}
        self.platform_fee_settings: PlatformFeeSettings | None = None
        self.platform_tax_rate: Decimal | None = None
        self.promotions: dict[str, Promotion] = {}
        self.loyalty_rules: dict[str, LoyaltyRule] = {}
        self.offerings: dict[UUID, Offering] = {}
        self.addons: dict[UUID, ServiceAddon] = {}
        self.products: dict[UUID, Product] = {}
        self.packages: dict[UUID, ServicePackage] = {}
        self.failing: str | None = None
        self.promotion_lookups = 0

    def _check(self, source: str) -> None:
        if self.failing == source:
            raise ConfigLookupError(source)

    def get_provider_fee_profile(self, provider_id):
        self._check("providers")
        return self.providers.get(provider_id)

    def get_fee_config(self, fee_config_id):
        self._check("platform_fee_config")
        config = self.fee_configs.get(fee_config_id)
        if config is None or not config.is_active:
            return None
        return config

    def get_platform_fee_settings(self):
        self._check("platform_settings")
        return self.platform_fee_settings

    def get_platform_default_tax_rate(self):
        self._check("platform_settings")
        return self.platform_tax_rate

    def get_promotion_by_code(self, code):
        self._check("promotions")
        self.promotion_lookups += 1
        return self.promotions.get(normalize_promotion_code(code))

    def get_offerings(self, offering_ids):
        self._check("offerings")
        return {i: self.offerings[i] for i in offering_ids if i in self.offerings}

    def get_addons(self, addon_ids):
        self._check("service_addons")
        return {i: self.addons[i] for i in addon_ids if i in self.addons}

    def get_products(self, product_ids):
        self._check("products")
        return {i: self.products[i] for i in product_ids if i in self.products}

    def get_service_package(self, package_id):
        self._check("service_packages")
        return self.packages.get(package_id)

    def get_loyalty_rule(self, currency):
        self._check("loyalty_rules")
        return self.loyalty_rules.get(currency)

    # Test setup helpers

    def add_provider(self, **fields) -> ProviderFeeProfile:
        fields.setdefault("provider_id", PROVIDER_ID)
        profile = ProviderFeeProfile(**fields)
        self.providers[profile.provider_id] = profile
        return profile

    def add_fee_config(self, **fields) -> FeeConfig:
        fields.setdefault("id", uuid4())
        config = FeeConfig(**fields)
        self.fee_configs[config.id] = config
        return config

    def add_promotion(self, **fields) -> Promotion:
        fields.setdefault("id", uuid4())
        fields.setdefault("code", "SAVE10")
        fields.setdefault("type", "percentage")
        fields.setdefault("value", Decimal("10"))
        fields.setdefault("is_active", True)
        promotion = Promotion(**fields)
        self.promotions[promotion.code] = promotion
        return promotion

    def add_offering(self, **fields) -> Offering:
        fields.setdefault("id", uuid4())
        fields.setdefault("provider_id", PROVIDER_ID)
        fields.setdefault("price", Decimal("100"))
        fields.setdefault("is_active", True)
        offering = Offering(**fields)
        self.offerings[offering.id] = offering
        return offering

    def add_addon(self, **fields) -> ServiceAddon:
        fields.setdefault("id", uuid4())
        fields.setdefault("provider_id", PROVIDER_ID)
        fields.setdefault("is_active", True)
        addon = ServiceAddon(**fields)
        self.addons[addon.id] = addon
        return addon

    def add_product(self, **fields) -> Product:
        fields.setdefault("id", uuid4())
        fields.setdefault("provider_id", PROVIDER_ID)
        fields.setdefault("name", "Argan oil")
        fields.setdefault("is_active", True)
        product = Product(**fields)
        self.products[product.id] = product
        return product

    def add_package(self, **fields) -> ServicePackage:
        fields.setdefault("id", uuid4())
        fields.setdefault("provider_id", PROVIDER_ID)
        package = ServicePackage(**fields)
        self.packages[package.id] = package
        return package


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def fake_config():
    """Empty in-memory config source."""
    return FakePricingConfigService()


@pytest.fixture
def pricing_config():
    return PricingConfig()


@pytest.fixture
def engine(fake_config, pricing_config):
    from core.services.pricing_engine import PricingEngine

    return PricingEngine(fake_config, pricing_config)


@pytest.fixture
def make_input():
    """Factory for PricingInput with sensible defaults."""

    def _make(**overrides) -> PricingInput:
        fields = {
            "base_price": Decimal("100"),
            "travel_fee": Decimal("0"),
            "currency": "ZAR",
            "provider_id": PROVIDER_ID,
            "customer_id": CUSTOMER_ID,
            "location_type": "at_salon",
            "location_id": SALON_LOCATION_ID,
        }
        fields.update(overrides)
        return PricingInput(**fields)

    return _make


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time."""
    return NOW


@pytest.fixture
def provider_id() -> UUID:
    return PROVIDER_ID


@pytest.fixture
def customer_id() -> UUID:
    return CUSTOMER_ID


@pytest.fixture
def salon_location_id() -> UUID:
    return SALON_LOCATION_ID


@pytest.fixture
def other_location_id() -> UUID:
    return OTHER_LOCATION_ID
