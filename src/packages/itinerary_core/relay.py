# src/packages/itinerary_core/relay.py
import json
from dataclasses import dataclass
from typing import Any, Callable, Dict

from packages.itinerary_core.clients import ChatTransport
from packages.itinerary_core.config import CORS_HEADERS, NO_CACHE_HEADERS, RelayConfig, log
from packages.itinerary_core.errors import (
    ConfigurationError,
    InvalidUpstreamResponseError,
    MethodNotAllowedError,
    RelayError,
    RequestBodyError,
    UpstreamStatusError,
)
from packages.itinerary_core.llm_prompts import build_chat_request
from packages.itinerary_core.models import ItineraryPlan, RelayResult
from packages.itinerary_core.utils import truncate


@dataclass(frozen=True)
class RouteProfile:
    """What differs between the endpoints sharing one relay."""

    name: str
    system_prompt: str
    build_prompt: Callable[[Dict[str, Any]], str]
    suppress_cache: bool = False


class ItineraryRelay:
    """
    Forwards one itinerary request to the chat-completion provider and maps
    the outcome to an HTTP result. Every failure ends up as a JSON envelope
    with an `error` key; nothing is retried.
    """

    def __init__(self, config: RelayConfig, transport: ChatTransport):
        self.config = config
        self.transport = transport

    async def handle(self, profile: RouteProfile, method: str, body: bytes) -> RelayResult:
        method = method.upper()
        if method == "OPTIONS":
            return RelayResult(status_code=200, headers=dict(CORS_HEADERS))

        headers = self._response_headers(profile)
        try:
            if method != "POST":
                raise MethodNotAllowedError("Method Not Allowed")
            payload = self._parse_body(body)
            self._require_api_key()
            user_prompt = profile.build_prompt(payload)
            content = await self.forward(profile.system_prompt, user_prompt)
        except RelayError as e:
            log.warning("[%s] %s (%d)", profile.name, e.message, e.status_code)
            return self._error_result(e.status_code, e.to_dict(), headers)
        except Exception as e:
            log.exception("[%s] Unexpected error while relaying: %s", profile.name, e)
            return self._error_result(500, {"error": str(e) or e.__class__.__name__}, headers)

        return RelayResult(status_code=200, body=content, headers=headers)

    async def forward(self, system_prompt: str, user_prompt: str) -> bytes:
        """Sends the conversation upstream and returns the provider's body untouched."""
        self._require_api_key()
        chat_request = build_chat_request(system_prompt, user_prompt, model=self.config.model)
        log.info("Requesting itinerary from %s: %s", self.config.model, truncate(user_prompt, 120))

        reply = await self.transport.send(chat_request.model_dump())
        if not reply.ok:
            raise UpstreamStatusError(reply.status_code, reply.body.decode("utf-8", errors="replace"))

        _check_completion(reply.body)
        return reply.body

    def _require_api_key(self):
        if not self.config.api_key:
            raise ConfigurationError("Configuration Error: API Key missing on server.")

    @staticmethod
    def _parse_body(body: bytes) -> Dict[str, Any]:
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise RequestBodyError(str(e))
        if not isinstance(payload, dict):
            raise RequestBodyError("Request body must be a JSON object")
        return payload

    @staticmethod
    def _response_headers(profile: RouteProfile) -> Dict[str, str]:
        headers = dict(CORS_HEADERS)
        headers["Content-Type"] = "application/json"
        if profile.suppress_cache:
            headers.update(NO_CACHE_HEADERS)
        return headers

    @staticmethod
    def _error_result(status_code: int, envelope: Dict[str, Any], headers: Dict[str, str]) -> RelayResult:
        return RelayResult(
            status_code=status_code,
            body=json.dumps(envelope).encode("utf-8"),
            headers=headers,
        )


def _check_completion(body: bytes) -> Dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as e:
        raise InvalidUpstreamResponseError(f"Invalid JSON from AI provider: {e}")

    choices = data.get("choices") if isinstance(data, dict) else None
    if not choices or not isinstance(choices, list) or not isinstance(choices[0], dict) or not choices[0].get("message"):
        raise InvalidUpstreamResponseError("Invalid response from AI provider")
    return data


def read_itinerary(body: bytes) -> ItineraryPlan:
    """Parses the JSON itinerary the model wrote into `choices[0].message.content`."""
    data = _check_completion(body)
    content = data["choices"][0]["message"].get("content") or "{}"
    try:
        return ItineraryPlan.model_validate_json(content)
    except ValueError as e:
        raise InvalidUpstreamResponseError(f"Itinerary content is not valid JSON: {e}")
