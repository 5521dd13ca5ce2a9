"""AP3 person API client - Serverless-optimized."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from backend.config import Settings
from backend.errors import ConfigError, TransportError
from backend.models.schemas import AP3Response, MergeRequest

logger = logging.getLogger(__name__)


def decode_body(text: str) -> Any:
    """Decode a response body as JSON, falling back to the raw text.

    An empty body decodes to None.
    """
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class AP3Client:
    """Thin async wrapper around the AP3 merge endpoint.

    Opens a short-lived connection per call, suitable for Vercel serverless
    functions. ``transport`` lets tests swap in ``httpx.MockTransport``.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        if not settings.ap3_api_key:
            raise ConfigError("AP3_API_KEY not set.")
        self.api_key = settings.ap3_api_key
        self.merge_url = settings.merge_url
        self.timeout = settings.timeout_seconds
        self.transport = transport

    async def merge_people(self, request: MergeRequest) -> AP3Response:
        """POST a merge request and return the decoded response.

        Raises:
            TransportError: on timeout or any network failure
        """
        headers = {"Content-Type": "application/json", "X-Api-Key": self.api_key}
        body = json.dumps(request.to_wire())

        # httpx timeouts apply per phase; asyncio.timeout bounds the whole call
        # including the body read.
        try:
            async with asyncio.timeout(self.timeout):
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    response = await client.post(self.merge_url, headers=headers, content=body)
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise TransportError(f"AP3 request timed out after {self.timeout:g}s") from exc
        except httpx.TransportError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

        return AP3Response(
            status_code=response.status_code,
            reason=response.reason_phrase,
            data=decode_body(response.text),
        )
