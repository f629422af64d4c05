"""FastAPI application factory."""

from fastapi import FastAPI

from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from api.pricing import create_pricing_router
from clients.postgres_client import PostgresClient
from clients.vault_client import get_database_url, get_statement_timeout_ms
from core.config import PricingConfig
from core.services.booking_quote_service import BookingQuoteService
from core.services.pricing_config_service import PricingConfigService
from core.services.pricing_engine import PricingEngine


def build_services(postgres, config: PricingConfig | None = None) -> dict:
    """Wire pricing services over a PostgresClient."""
    config = config or PricingConfig()
    config_service = PricingConfigService(postgres)
    engine = PricingEngine(config_service, config)
    return {
        "pricing_config": config_service,
        "pricing_engine": engine,
        "booking_quote": BookingQuoteService(config_service, engine, config),
    }


def create_app(services: dict) -> FastAPI:
    """Build the API app around already-wired services."""
    app = FastAPI(title="Marketplace Pricing")
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_pricing_router(services), prefix="/api")

    return app


def create_default_app() -> FastAPI:
    """
    Production app: database URL and statement timeout from Vault.

    Run with: uvicorn --factory api.app:create_default_app
    """
    postgres = PostgresClient(get_database_url(), get_statement_timeout_ms())
    return create_app(build_services(postgres))
