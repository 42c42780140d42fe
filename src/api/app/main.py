# src/api/app/main.py
from typing import Optional

from fastapi import FastAPI
from contextlib import asynccontextmanager

from packages.itinerary_core.clients import CerebrasChatTransport, ChatTransport
from packages.itinerary_core.config import RelayConfig, log
from .v1.routes import itinerary as itinerary_v1_router


def create_app(config: Optional[RelayConfig] = None, transport: Optional[ChatTransport] = None) -> FastAPI:
    config = config or RelayConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if app.state.transport is None:
            owned = app.state.transport = CerebrasChatTransport(config)
        if not config.api_key:
            log.warning("CEREBRAS_KEY is not set; itinerary requests will fail until it is configured.")
        yield
        if owned is not None:
            await owned.aclose()
            app.state.transport = None

    app = FastAPI(title="Itinerary Relay API", version="1.0.0", lifespan=lifespan)
    app.state.config = config
    app.state.transport = transport

    app.include_router(itinerary_v1_router.router, tags=["v1 - Itinerary"])

    @app.get("/", tags=["Root"])
    def read_root():
        return {"status": "Itinerary relay is running"}

    return app


app = create_app()
