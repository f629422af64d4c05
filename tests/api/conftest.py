"""API test fixtures - TestClient over pricing services backed by in-memory config."""

import pytest
from starlette.testclient import TestClient

from api.app import create_app
from core.services.booking_quote_service import BookingQuoteService


# =============================================================================
# SERVICES DICT
# =============================================================================


@pytest.fixture
def services(fake_config, engine, pricing_config):
    return {
        "pricing_config": fake_config,
        "pricing_engine": engine,
        "booking_quote": BookingQuoteService(fake_config, engine, pricing_config),
    }


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def app(services):
    """FastAPI app with request IDs, error handlers, and pricing routes."""
    return create_app(services)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
