"""FastAPI application entry point - Serverless-optimized for Vercel."""
from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI

from backend.config import Settings
from backend.routes import webhook
from backend.services.forwarder import WebhookForwarder

SERVICE_NAME = "ap3-merge-relay"
VERSION = "0.1.0"


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the app. ``transport`` overrides the outbound httpx transport."""
    if settings is None:
        settings = Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(
        title="AP3 Merge Relay",
        description="Forwards contact webhooks to the AP3 person merge API",
        version=VERSION,
    )
    app.state.settings = settings
    app.state.forwarder = WebhookForwarder(settings, transport=transport)

    # Include routes with /api prefix
    app.include_router(webhook.router, prefix="/api", tags=["webhook"])

    @app.get("/api")
    async def root():
        """API status endpoint."""
        return {"status": "ok", "service": SERVICE_NAME, "version": VERSION}

    @app.get("/api/health")
    async def health():
        """Health check for load balancers."""
        return {
            "status": "healthy",
            "ap3_configured": app.state.settings.is_configured,
        }

    return app


app = create_app()

# Vercel will auto-detect the `app` export for FastAPI
