# src/packages/itinerary_core/errors.py
from typing import Optional


class RelayError(Exception):
    """An error the relay turns into a JSON error envelope."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class MethodNotAllowedError(RelayError):
    status_code = 405


class RequestBodyError(RelayError):
    pass


class ConfigurationError(RelayError):
    pass


class UpstreamStatusError(RelayError):
    status_code = 502

    def __init__(self, upstream_status: int, details: str):
        super().__init__(f"Upstream API Error: {upstream_status}", details)


class InvalidUpstreamResponseError(RelayError):
    pass
