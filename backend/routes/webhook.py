"""Webhook receiver route."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from backend.services.forwarder import WebhookForwarder

router = APIRouter()


def get_forwarder(request: Request) -> WebhookForwarder:
    """Forwarder built by the app factory."""
    return request.app.state.forwarder


@router.post("/webhook")
async def receive_webhook(
    request: Request,
    forwarder: WebhookForwarder = Depends(get_forwarder),
):
    """Forward a contact notification to the AP3 person merge API.

    Accepts ``{"contact_id": ...}`` or the same object wrapped under ``body``.
    Answers with AP3's status code when AP3 rejects the merge.
    """
    raw_body = await request.body()
    status_code, payload = await forwarder.handle(raw_body)
    return JSONResponse(payload, status_code=status_code)
