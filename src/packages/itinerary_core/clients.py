# src/packages/itinerary_core/clients.py
from typing import Any, Dict, Optional, Protocol

import httpx
from openai import AsyncOpenAI, APIStatusError

from packages.itinerary_core.config import RelayConfig, log
from packages.itinerary_core.models import UpstreamReply
from packages.itinerary_core.utils import _close_if_callable


class ChatTransport(Protocol):
    """Sends one chat-completion request and hands back the raw status and body."""

    async def send(self, payload: Dict[str, Any]) -> UpstreamReply:
        ...


class CerebrasChatTransport:
    """
    Chat-completion transport for Cerebras' OpenAI-compatible endpoint.
    The SDK's retries are switched off and the raw response is kept so the
    relay can pass the provider's body through unchanged.
    """

    def __init__(self, config: RelayConfig, http_client: Optional[httpx.AsyncClient] = None):
        self._config = config
        self._http_client = http_client
        self._client: Optional[AsyncOpenAI] = None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    async def send(self, payload: Dict[str, Any]) -> UpstreamReply:
        client = self._get_client()
        try:
            raw = await client.chat.completions.with_raw_response.create(**payload)
        except APIStatusError as e:
            log.warning("Upstream responded with HTTP %s", e.status_code)
            return UpstreamReply(status_code=e.status_code, body=e.response.content)
        response = raw.http_response
        return UpstreamReply(status_code=response.status_code, body=response.content)

    async def aclose(self):
        await _close_if_callable(self._client)
        self._client = None
