# src/api/app/v1/routes/itinerary.py
from typing import Awaitable, Callable

from fastapi import APIRouter, Request, Response
from starlette.types import Receive, Scope, Send

from packages.itinerary_core.models import RelayResult
from ..services.itinerary_service import ItineraryService

router = APIRouter()

PlanMethod = Callable[[ItineraryService, str, bytes], Awaitable[RelayResult]]


class RelayEndpoint:
    """
    ASGI endpoint that hands every HTTP method to the relay, so pre-flight
    and wrong-method answers carry the same CORS headers as the rest.
    """

    def __init__(self, plan: PlanMethod):
        self.plan = plan

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        request = Request(scope, receive)
        result = await self.plan(ItineraryService(request), request.method, await request.body())
        response = Response(content=result.body, status_code=result.status_code, headers=result.headers)
        await response(scope, receive, send)


# Class endpoints registered without `methods` match any verb.
router.add_route("/api/route", RelayEndpoint(ItineraryService.plan_route), name="handle_route_request")
router.add_route("/travel", RelayEndpoint(ItineraryService.plan_travel), name="handle_travel_request")
