"""POST /api/pricing/* - booking and custom-offer price quotes."""

from fastapi import APIRouter, Request

from api.base import success_response
from api.middleware import get_request_id
from core.models import BookingDraft, CustomOfferDraft


def create_pricing_router(services: dict) -> APIRouter:
    router = APIRouter()

    quote_svc = services["booking_quote"]

    @router.post("/pricing/bookings/quote")
    async def quote_booking(request: Request, draft: BookingDraft):
        result = quote_svc.quote_booking(draft)
        return success_response(
            result.model_dump(mode="json"), get_request_id(request)
        ).model_dump(mode="json")

    @router.post("/pricing/custom-offers/quote")
    async def quote_custom_offer(request: Request, draft: CustomOfferDraft):
        result = quote_svc.quote_custom_offer(draft)
        return success_response(
            result.model_dump(mode="json"), get_request_id(request)
        ).model_dump(mode="json")

    return router
