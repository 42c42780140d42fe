import json

import pytest
from httpx import ASGITransport, AsyncClient

from api.app.main import create_app
from packages.itinerary_core.config import RelayConfig
from packages.itinerary_core.models import UpstreamReply

ITINERARY_CONTENT = {
    "dias": [
        {
            "dia": 1,
            "titulo": "Casco antiguo",
            "historia": "Paseo por las calles del centro 🏰",
            "paradas": ["Plaza Mayor", "Catedral", "Mercado", "Fin"],
        }
    ]
}

VALID_UPSTREAM_BODY = json.dumps(
    {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "model": "zai-glm-4.7",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": json.dumps(ITINERARY_CONTENT)},
                "finish_reason": "stop",
            }
        ],
    },
    separators=(",", ":"),
).encode("utf-8")


class FakeTransport:
    """Records every outbound payload and answers with a canned reply."""

    def __init__(self, reply=None, error=None):
        self.reply = reply or UpstreamReply(status_code=200, body=VALID_UPSTREAM_BODY)
        self.error = error
        self.calls = []

    async def send(self, payload):
        self.calls.append(payload)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def upstream_body():
    return VALID_UPSTREAM_BODY


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def config():
    return RelayConfig(api_key="test-key")


@pytest.fixture
async def relay_client(config, transport):
    """Fixture to provide an async client for the relay API with a fake upstream."""
    app = create_app(config=config, transport=transport)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
