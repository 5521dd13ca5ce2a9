"""Environment-driven settings for the merge relay."""
from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_MERGE_URL = "https://api.eu.ap3api.com/v1/person/merge"
DEFAULT_TIMEOUT_SECONDS = 30.0

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseModel):
    """Configuration injected into the app at creation time.

    ``ap3_api_key`` may be missing; the app still starts so that health
    checks work, and every webhook call answers with a configuration error.
    """

    ap3_api_key: str | None = None
    merge_url: str = DEFAULT_MERGE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"

    model_config = {"frozen": True}

    @property
    def is_configured(self) -> bool:
        """Return True if the downstream API key is set."""
        return bool(self.ap3_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from env vars, loading ``.env.local`` when present."""
        if _ENV_FILE.exists():
            load_dotenv(_ENV_FILE, override=False)

        raw_timeout = os.getenv("AP3_TIMEOUT_SECONDS")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ValueError(f"AP3_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ValueError("AP3_TIMEOUT_SECONDS must be positive.")

        settings = cls(
            ap3_api_key=os.getenv("AP3_API_KEY") or None,
            merge_url=os.getenv("AP3_MERGE_URL") or DEFAULT_MERGE_URL,
            timeout_seconds=timeout,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
        if not settings.is_configured:
            logging.warning(
                "AP3_API_KEY not set — webhook calls will fail with a configuration error. "
                "Set AP3_API_KEY in environment."
            )
        return settings
