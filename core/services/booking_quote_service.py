"""
Booking and custom-offer quotes.

Caller-side adapter around the pricing engine: prices a booking draft from
the provider's catalog (offerings, add-ons, products, package), builds a
PricingInput, runs the engine, and enforces the provider's minimum order
for house calls. Persisting the result and committing promotion usage
happen at booking confirmation, not here.
"""

import logging
from decimal import Decimal
from uuid import UUID

from core.config import PricingConfig
from core.exceptions import MinimumOrderNotMetError
from core.models import (
    BookingDraft,
    CustomOfferDraft,
    LocationType,
    Offering,
    PricingInput,
    PricingResult,
    Product,
    ProviderFeeProfile,
    ServiceAddon,
    ServicePackage,
)
from core.money import ZERO, non_negative, percent_of, round2
from core.services.pricing_engine import PricingEngine

logger = logging.getLogger(__name__)


def services_subtotal(draft: BookingDraft, offerings: dict[UUID, Offering]) -> Decimal:
    """Offering prices, plus their at-home adjustment on at-home bookings."""
    at_home = draft.location_type == LocationType.AT_HOME
    total = ZERO
    for item in draft.items:
        offering = offerings[item.offering_id]
        total += offering.price
        if at_home:
            total += offering.at_home_price_adjustment
    return round2(total)


def package_discount(package: ServicePackage | None, services: Decimal) -> Decimal:
    """
    Discount a package gives on the services subtotal.

    A package price discounts down to that price; otherwise the discount
    percentage applies. Never negative.
    """
    if package is None:
        return ZERO
    if package.price is not None:
        return non_negative(services - package.price)
    if package.discount_percentage:
        return non_negative(percent_of(services, package.discount_percentage))
    return ZERO


def booking_base_price(
    draft: BookingDraft,
    offerings: dict[UUID, Offering],
    addons: dict[UUID, ServiceAddon],
    products: dict[UUID, Product],
    package: ServicePackage | None = None,
) -> Decimal:
    """Discounted services, add-ons and products, before travel fee."""
    services = services_subtotal(draft, offerings)
    services = max(ZERO, services - package_discount(package, services))

    addon_total = sum((addons[addon_id].price for addon_id in draft.addons), ZERO)
    product_total = sum(
        (products[p.product_id].retail_price * p.quantity for p in draft.products), ZERO
    )

    return round2(services + addon_total + product_total)


def travel_fee_for(location_type: LocationType, travel_fee: Decimal | None) -> Decimal:
    """Travel fee only applies to at-home bookings."""
    if location_type != LocationType.AT_HOME or travel_fee is None:
        return ZERO
    return round2(travel_fee)


class BookingQuoteService:
    """Service for pricing booking drafts and custom offers."""

    def __init__(self, config_service, engine: PricingEngine, config: PricingConfig | None = None):
        self.config_service = config_service
        self.engine = engine
        self.config = config or PricingConfig()

    def _get_provider(self, provider_id) -> ProviderFeeProfile:
        profile = self.config_service.get_provider_fee_profile(provider_id)
        if profile is None:
            raise ValueError(f"Provider {provider_id} not found")
        return profile

    # =========================================================================
    # CATALOG CHECKS
    # =========================================================================

    def _get_offerings(self, draft: BookingDraft) -> dict[UUID, Offering]:
        offerings = self.config_service.get_offerings(
            list(dict.fromkeys(item.offering_id for item in draft.items))
        )
        for item in draft.items:
            offering = offerings.get(item.offering_id)
            if offering is None or offering.provider_id != draft.provider_id or not offering.is_active:
                raise ValueError("Invalid service selection")
            if draft.location_type == LocationType.AT_HOME and offering.supports_at_home is False:
                raise ValueError("One or more services do not support at-home")
        return offerings

    def _get_addons(self, draft: BookingDraft) -> dict[UUID, ServiceAddon]:
        addons = self.config_service.get_addons(list(dict.fromkeys(draft.addons)))
        for addon_id in draft.addons:
            addon = addons.get(addon_id)
            if addon is None or addon.provider_id != draft.provider_id or not addon.is_active:
                raise ValueError("Invalid add-on selection")
        return addons

    def _get_products(self, draft: BookingDraft) -> dict[UUID, Product]:
        products = self.config_service.get_products(
            list(dict.fromkeys(p.product_id for p in draft.products))
        )
        for line in draft.products:
            product = products.get(line.product_id)
            if product is None or product.provider_id != draft.provider_id or not product.is_active:
                raise ValueError("Invalid product selection")
            if product.track_stock_quantity and line.quantity > product.units_in_stock:
                raise ValueError(f"Only {product.units_in_stock} units available for {product.name}")
        return products

    def _get_package(self, draft: BookingDraft) -> ServicePackage | None:
        if draft.package_id is None:
            return None

        package = self.config_service.get_service_package(draft.package_id)
        if package is None or package.provider_id != draft.provider_id:
            raise ValueError("Invalid package selection")
        if (
            draft.location_type == LocationType.AT_SALON
            and draft.location_id is not None
            and not package.available_at(draft.location_id)
        ):
            raise ValueError("Package not available at this location")
        return package

    # =========================================================================
    # QUOTES
    # =========================================================================

    def quote_booking(self, draft: BookingDraft) -> PricingResult:
        """
        Price a customer booking draft from the provider's catalog.

        Args:
            draft: Booking draft from the booking flow

        Returns:
            Price breakdown for the booking

        Raises:
            ValueError: If the provider does not exist, or an offering,
                add-on, product or package is unknown, inactive, belongs to
                another provider or is out of stock
            MinimumOrderNotMetError: If an at-home booking is under the
                provider's minimum mobile booking amount
            ConfigLookupError: If a configuration read fails
        """
        provider = self._get_provider(draft.provider_id)
        currency = provider.currency or self.config.default_currency

        base_price = booking_base_price(
            draft,
            self._get_offerings(draft),
            self._get_addons(draft),
            self._get_products(draft),
            self._get_package(draft),
        )

        pricing_input = PricingInput(
            base_price=base_price,
            travel_fee=travel_fee_for(draft.location_type, draft.travel_fee),
            currency=currency,
            provider_id=draft.provider_id,
            customer_id=draft.customer_id,
            tip_amount=draft.tip_amount,
            promotion_code=draft.promotion_code,
            location_type=draft.location_type,
            location_id=draft.location_id,
        )
        result = self.engine.compute(pricing_input, profile=provider)

        minimum = provider.minimum_mobile_booking_amount
        if (
            draft.location_type == LocationType.AT_HOME
            and minimum is not None
            and minimum > 0
            and result.subtotal_after_discount < minimum
        ):
            logger.info(
                f"At-home booking for provider {draft.provider_id} below minimum "
                f"{minimum} {currency}: {result.subtotal_after_discount}"
            )
            raise MinimumOrderNotMetError(minimum, result.subtotal_after_discount, currency)

        return result

    def quote_custom_offer(self, draft: CustomOfferDraft) -> PricingResult:
        """
        Price a provider's custom offer.

        Offers carry no tip and no promo code; the customer pays the offer
        price plus travel fee (at-home only), tax and service fee.

        Raises:
            ValueError: If the provider does not exist
            ConfigLookupError: If a configuration read fails
        """
        provider = self._get_provider(draft.provider_id)
        currency = draft.currency or provider.currency or self.config.default_currency

        pricing_input = PricingInput(
            base_price=draft.price,
            travel_fee=travel_fee_for(draft.location_type, draft.travel_fee),
            currency=currency,
            provider_id=draft.provider_id,
            customer_id=draft.customer_id,
            location_type=draft.location_type,
            location_id=draft.location_id,
        )
        return self.engine.compute(pricing_input, profile=provider)
