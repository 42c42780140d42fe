# src/packages/itinerary_core/models.py
from typing import Dict, List, Literal

from pydantic import BaseModel, Field

from packages.itinerary_core.config import CHAT_MODEL, TEMPERATURE, RESPONSE_FORMAT


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class UpstreamChatRequest(BaseModel):
    model: str = CHAT_MODEL
    messages: List[ChatMessage]
    temperature: float = TEMPERATURE
    response_format: Dict[str, str] = Field(default_factory=lambda: dict(RESPONSE_FORMAT))


class UpstreamReply(BaseModel):
    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class RelayResult(BaseModel):
    status_code: int
    body: bytes = b""
    headers: Dict[str, str] = Field(default_factory=dict)


# Shape of the itinerary the model is asked to return
class ItineraryDay(BaseModel):
    dia: int
    titulo: str = ""
    historia: str = ""
    paradas: List[str] = Field(default_factory=list)


class ItineraryPlan(BaseModel):
    dias: List[ItineraryDay] = Field(default_factory=list)
