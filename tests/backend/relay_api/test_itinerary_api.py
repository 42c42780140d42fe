import json

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from api.app.main import create_app
from packages.itinerary_core.clients import CerebrasChatTransport
from packages.itinerary_core.config import RelayConfig
from packages.itinerary_core.models import UpstreamReply

TRAVEL = {
    "location": "Valencia",
    "interest": "arroces y mercados",
    "exactLocation": "Estación del Norte",
    "routeType": "circular",
    "duration": 180,
    "daysCount": 2,
}


@pytest.mark.asyncio
async def test_root(relay_client):
    response = await relay_client.get("/")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_travel_relays_upstream_body(relay_client, transport, upstream_body):
    response = await relay_client.post("/travel", json=TRAVEL)

    assert response.status_code == 200
    assert response.content == upstream_body
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "*"
    assert "cache-control" not in response.headers

    prompt = transport.calls[0]["messages"][1]["content"]
    assert "CIRCULAR" in prompt
    assert 'Inicio obligatorio cada día: "Estación del Norte"' in prompt
    assert "itinerario de 2 día(s) en Valencia" in prompt
    assert "180 minutos" in prompt


@pytest.mark.asyncio
async def test_route_relays_with_cache_suppression(relay_client, transport, upstream_body):
    response = await relay_client.post("/api/route", json={"prompt": "Ruta por Bilbao"})

    assert response.status_code == 200
    assert response.content == upstream_body
    assert response.headers["cache-control"] == "no-store, no-cache, must-revalidate, proxy-revalidate"
    assert response.headers["pragma"] == "no-cache"
    assert response.headers["expires"] == "0"
    assert transport.calls[0]["messages"][1]["content"] == "Ruta por Bilbao"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/travel", "/api/route"])
async def test_preflight(relay_client, transport, path):
    response = await relay_client.request("OPTIONS", path)

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-headers"] == "Content-Type"
    assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
    assert transport.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
async def test_wrong_method(relay_client, transport, method):
    response = await relay_client.request(method, "/travel")

    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
    assert response.headers["access-control-allow-origin"] == "*"
    assert transport.calls == []


@pytest.mark.asyncio
async def test_missing_api_key(make_transport):
    transport = make_transport()
    app = create_app(config=RelayConfig(api_key=None), transport=transport)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/travel", json=TRAVEL)

    assert response.status_code == 500
    assert response.json() == {"error": "Configuration Error: API Key missing on server."}
    assert response.headers["access-control-allow-origin"] == "*"
    assert transport.calls == []


@pytest.mark.asyncio
async def test_invalid_json_body(relay_client, transport):
    response = await relay_client.post(
        "/travel", content=b"{location: Valencia", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 500
    assert "error" in response.json()
    assert transport.calls == []


@pytest.mark.asyncio
async def test_upstream_error_status(config, make_transport):
    transport = make_transport(reply=UpstreamReply(status_code=429, body=b"rate limited"))
    app = create_app(config=config, transport=transport)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/travel", json=TRAVEL)

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "Upstream API Error: 429"
    assert body["details"] == "rate limited"


@pytest.mark.asyncio
async def test_upstream_without_choices(config, make_transport):
    transport = make_transport(reply=UpstreamReply(status_code=200, body=json.dumps({"choices": []}).encode()))
    app = create_app(config=config, transport=transport)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/api/route", json={"prompt": "Ruta"})

    assert response.status_code == 500
    assert response.json()["error"]
    assert response.headers["cache-control"].startswith("no-store")


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/travel", "/api/route"])
@pytest.mark.parametrize("method", ["TRACE", "PROPFIND", "HEAD"])
async def test_any_other_method_is_answered_by_the_relay(relay_client, transport, path, method):
    response = await relay_client.request(method, path)

    assert response.status_code == 405
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
    if method != "HEAD":
        assert response.json() == {"error": "Method Not Allowed"}
    assert transport.calls == []


def test_lifespan_builds_and_closes_default_transport(monkeypatch):
    closed = []

    async def fake_aclose(self):
        closed.append(self)

    monkeypatch.setattr(CerebrasChatTransport, "aclose", fake_aclose)
    app = create_app(config=RelayConfig(api_key="test-key"))
    assert app.state.transport is None

    with TestClient(app):
        transport = app.state.transport
        assert isinstance(transport, CerebrasChatTransport)

    assert closed == [transport]
    assert app.state.transport is None


def test_lifespan_keeps_injected_transport(make_transport, monkeypatch):
    closed = []

    async def fake_aclose(self):
        closed.append(self)

    monkeypatch.setattr(CerebrasChatTransport, "aclose", fake_aclose)
    transport = make_transport()
    app = create_app(config=RelayConfig(api_key="test-key"), transport=transport)

    with TestClient(app) as client:
        response = client.post("/travel", json=TRAVEL)

    assert response.status_code == 200
    assert len(transport.calls) == 1
    assert app.state.transport is transport
    assert closed == []
