# src/packages/itinerary_core/config.py
import os
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


def configure_logging(dotenv_path: Optional[str] = None):
    # .env has to be loaded first so LOG_LEVEL set there takes effect
    load_dotenv(dotenv_path)
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    # Quiet the SDK's transport chatter
    logging.getLogger("httpx").setLevel(logging.WARNING)


# --- Load Environment Variables and Basic Logging ---
configure_logging()
log = logging.getLogger("itinerary_relay")

# --- Model and Request Config ---
CEREBRAS_BASE_URL = "https://api.cerebras.ai/v1"
CHAT_MODEL = "zai-glm-4.7"
TEMPERATURE = 0.2
RESPONSE_FORMAT = {"type": "json_object"}

DEFAULT_DURATION_MINUTES = 120
DEFAULT_DAYS_COUNT = 1

# --- Response Headers ---
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class RelayConfig(BaseModel):
    """Server-side settings handed to the relay when it is built."""

    api_key: Optional[str] = None
    base_url: str = CEREBRAS_BASE_URL
    model: str = CHAT_MODEL

    @classmethod
    def from_env(cls) -> "RelayConfig":
        # The key is not required at startup: a missing key is reported per request.
        return cls(
            api_key=os.getenv("CEREBRAS_KEY") or None,
            base_url=os.getenv("CEREBRAS_BASE_URL", CEREBRAS_BASE_URL),
            model=os.getenv("CEREBRAS_MODEL", CHAT_MODEL),
        )
