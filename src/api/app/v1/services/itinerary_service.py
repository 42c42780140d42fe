# src/api/app/v1/services/itinerary_service.py
from typing import Any, Dict, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from packages.itinerary_core.errors import RequestBodyError
from packages.itinerary_core.llm_prompts import (
    ROUTE_SYSTEM_PROMPT,
    TRAVEL_SYSTEM_PROMPT,
    build_itinerary_prompt,
)
from packages.itinerary_core.models import RelayResult
from packages.itinerary_core.relay import ItineraryRelay, RouteProfile
from ..schemas.itinerary import ItineraryRequest, PromptRequest

ModelT = TypeVar("ModelT", bound=BaseModel)


def _validate(model: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in e.errors()
        )
        raise RequestBodyError(f"Invalid request body: {problems}")


def prompt_from_text(payload: Dict[str, Any]) -> str:
    return _validate(PromptRequest, payload).prompt


def prompt_from_preferences(payload: Dict[str, Any]) -> str:
    request = _validate(ItineraryRequest, payload)
    return build_itinerary_prompt(
        location=request.location,
        interest=request.interest,
        start=request.start_location,
        circular=request.is_circular,
        minutes=request.duration,
        days=request.days_count,
    )


ROUTE_PROFILE = RouteProfile(
    name="route",
    system_prompt=ROUTE_SYSTEM_PROMPT,
    build_prompt=prompt_from_text,
    suppress_cache=True,
)

TRAVEL_PROFILE = RouteProfile(
    name="travel",
    system_prompt=TRAVEL_SYSTEM_PROMPT,
    build_prompt=prompt_from_preferences,
)


class ItineraryService:
    def __init__(self, request: Request):
        self.relay = ItineraryRelay(request.app.state.config, request.app.state.transport)

    async def plan_route(self, method: str, body: bytes) -> RelayResult:
        """Relays a caller-written prompt."""
        return await self.relay.handle(ROUTE_PROFILE, method, body)

    async def plan_travel(self, method: str, body: bytes) -> RelayResult:
        """Builds the prompt from travel preferences, then relays it."""
        return await self.relay.handle(TRAVEL_PROFILE, method, body)
