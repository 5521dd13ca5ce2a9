"""Error types raised while forwarding a webhook, with their HTTP mapping."""
from __future__ import annotations

from typing import Any


class ForwarderError(Exception):
    """Base for every failure the webhook route answers with."""

    status_code = 500
    error = "Internal server error"

    def to_payload(self, duration_ms: int) -> dict[str, Any]:
        return {"success": False, "error": self.error, "duration_ms": duration_ms}


class InputError(ForwarderError):
    """Payload has no usable ``contact_id``."""

    status_code = 400
    error = "Missing contact_id in payload"


class ConfigError(ForwarderError):
    """Server is missing the downstream API key."""

    error = "API configuration error"


class DownstreamError(ForwarderError):
    """AP3 answered with a non-2xx status."""

    error = "AP3 API call failed"

    def __init__(self, status: int, details: Any = None, reason: str = ""):
        super().__init__(f"AP3 returned {status} {reason}".strip())
        self.status_code = status
        self.details = details
        self.reason = reason

    def to_payload(self, duration_ms: int) -> dict[str, Any]:
        return {
            "success": False,
            "error": self.error,
            "status": self.status_code,
            "details": self.details,
            "duration_ms": duration_ms,
        }


class UnexpectedError(ForwarderError):
    """Anything else: bad JSON, programming errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or "Unknown error"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "UnexpectedError":
        return cls(str(exc))

    def to_payload(self, duration_ms: int) -> dict[str, Any]:
        return {
            "success": False,
            "error": self.error,
            "message": self.message,
            "duration_ms": duration_ms,
        }


class TransportError(UnexpectedError):
    """Network failure or timeout talking to AP3."""
