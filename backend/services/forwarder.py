"""Webhook → AP3 merge forwarding."""
from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from backend.clients.ap3 import AP3Client
from backend.config import Settings
from backend.errors import (
    ConfigError,
    DownstreamError,
    ForwarderError,
    InputError,
    UnexpectedError,
)
from backend.models.schemas import ForwardSuccess, IncomingWebhookPayload, MergeRequest

logger = logging.getLogger(__name__)


def _is_set(value: Any) -> bool:
    # Empty objects and lists still count as a wrapper.
    return value is not None and value is not False and value != 0 and value != ""


def unwrap_payload(data: Any) -> Any:
    """Return ``data["body"]`` when the wrapper is set, else ``data`` itself.

    Raises:
        UnexpectedError: if the webhook body is JSON ``null``
    """
    if data is None:
        raise UnexpectedError("Webhook body is null")
    if isinstance(data, dict) and _is_set(data.get("body")):
        return data["body"]
    return data


def parse_notification(data: Any) -> IncomingWebhookPayload:
    """Validate the effective payload; a set ``body`` wrapper always wins.

    Raises:
        InputError: if the effective payload has no non-empty string contact_id
        UnexpectedError: if the webhook body is JSON ``null``
    """
    payload = unwrap_payload(data)
    if not isinstance(payload, dict):
        raise InputError("payload is not an object")
    try:
        return IncomingWebhookPayload.model_validate(payload)
    except ValidationError as exc:
        raise InputError("contact_id missing or invalid") from exc


class WebhookForwarder:
    """Turns one webhook request into one AP3 merge call."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    async def handle(self, raw_body: bytes) -> tuple[int, dict[str, Any]]:
        """Forward a raw webhook body. Returns (status_code, response payload)."""
        start = time.monotonic()
        try:
            payload = await self._forward(raw_body, start)
            return 200, payload
        except ForwarderError as exc:
            error = exc
        except Exception as exc:
            logger.exception("Error processing webhook: %s", exc)
            error = UnexpectedError.from_exception(exc)
        return error.status_code, error.to_payload(_elapsed_ms(start))

    async def _forward(self, raw_body: bytes, start: float) -> dict[str, Any]:
        try:
            data = json.loads(raw_body)
        except ValueError as exc:
            logger.error("Webhook body is not valid JSON: %s", exc)
            raise UnexpectedError.from_exception(exc) from exc
        logger.info("Received payload: %s", json.dumps(data))

        try:
            notification = parse_notification(data)
        except InputError:
            logger.error("Missing contact_id in payload")
            raise
        except UnexpectedError as exc:
            logger.error("Error processing webhook: %s", exc.message)
            raise
        contact_id = notification.contact_id
        logger.info(
            "Extracted contact_id: %s (campaign=%s, webhook=%s)",
            contact_id, notification.campaign_name, notification.webhook_name,
        )

        if not self.settings.is_configured:
            logger.error("AP3_API_KEY environment variable not set")
            raise ConfigError()

        merge_request = MergeRequest.for_contact(contact_id)
        logger.info("Sending request to AP3 API: %s", json.dumps(merge_request.to_wire()))

        client = AP3Client(self.settings, transport=self.transport)
        try:
            response = await client.merge_people(merge_request)
        except UnexpectedError as exc:
            logger.error("AP3 request failed: %s", exc.message)
            raise

        duration = _elapsed_ms(start)
        if not response.ok:
            logger.error(
                "AP3 API call failed: %s %s %s",
                response.status_code, response.reason, response.data,
            )
            raise DownstreamError(response.status_code, response.data, response.reason)

        logger.info("AP3 API call successful (%dms): %s", duration, response.data)
        return ForwardSuccess(
            contact_id=contact_id,
            ap3_response=response.data,
            duration_ms=duration,
        ).model_dump()


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.monotonic() - start) * 1000))
