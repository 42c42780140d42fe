# src/api/app/v1/schemas/itinerary.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional

from packages.itinerary_core.config import DEFAULT_DURATION_MINUTES, DEFAULT_DAYS_COUNT
from packages.itinerary_core.utils import positive_int, scalar_text


class PromptRequest(BaseModel):
    prompt: str


class ItineraryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location: str
    interest: str
    exact_location: Optional[str] = Field(default=None, alias="exactLocation")
    route_type: Optional[str] = Field(default=None, alias="routeType")
    duration: int = DEFAULT_DURATION_MINUTES
    days_count: int = Field(default=DEFAULT_DAYS_COUNT, alias="daysCount")

    @field_validator("location", "interest", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return scalar_text(value)

    @field_validator("exact_location", mode="before")
    @classmethod
    def _coerce_exact_location(cls, value: Any) -> Any:
        # false, 0 and "" all mean "start from the location"
        return scalar_text(value) if value else None

    @field_validator("route_type", mode="before")
    @classmethod
    def _coerce_route_type(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> int:
        return positive_int(value, DEFAULT_DURATION_MINUTES)

    @field_validator("days_count", mode="before")
    @classmethod
    def _coerce_days_count(cls, value: Any) -> int:
        return positive_int(value, DEFAULT_DAYS_COUNT)

    @property
    def start_location(self) -> str:
        return self.exact_location if self.exact_location else self.location

    @property
    def is_circular(self) -> bool:
        return self.route_type == "circular"
