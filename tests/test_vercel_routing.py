"""Guards for Vercel's Python auto-detection rules.

Vercel scans a fixed set of paths for a FastAPI instance named ``app``.
These tests keep exactly one such instance reachable, through the ``app.py``
shim, so that the webhook is served by a single function.

Rules reference: https://vercel.com/docs/frameworks/backend/fastapi
"""
from __future__ import annotations

from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Zero-config FastAPI entrypoint paths other than app.py
OTHER_ENTRYPOINTS = [
    "index.py",
    "server.py",
    "src/app.py",
    "src/index.py",
    "src/server.py",
    "app/app.py",
    "app/index.py",
    "app/server.py",
]


class TestVercelEntrypoint:
    """app.py must exist as a thin re-export shim of backend.main."""

    def test_app_py_exists(self):
        assert (PROJECT_ROOT / "app.py").exists(), (
            "app.py missing at project root. "
            "Expected: `from backend.main import app  # noqa: F401`"
        )

    def test_app_py_is_reexport_only(self):
        content = (PROJECT_ROOT / "app.py").read_text()
        lines = [l for l in content.strip().splitlines() if l.strip() and not l.strip().startswith("#")]
        assert len(lines) <= 3, (
            f"app.py has {len(lines)} non-empty/non-comment lines (expected ≤3)."
        )
        assert "from backend.main import app" in content
        assert "FastAPI(" not in content

    def test_shim_exports_the_webhook_app(self):
        import app as entrypoint

        paths = {route.path for route in entrypoint.app.routes}
        assert "/api/webhook" in paths


class TestNoCompetingEntrypoints:
    @pytest.mark.parametrize("entrypoint", OTHER_ENTRYPOINTS)
    def test_no_fastapi_entrypoint(self, entrypoint: str):
        path = PROJECT_ROOT / entrypoint
        if not path.exists():
            return
        assert "FastAPI" not in path.read_text(), (
            f"{entrypoint} contains 'FastAPI'; Vercel would deploy it as a second app."
        )

    def test_no_routable_api_directory(self):
        api_dir = PROJECT_ROOT / "api"
        if not api_dir.exists():
            return
        routable = [
            f for f in api_dir.rglob("*.py")
            if not f.name.startswith("_") and not f.name.startswith(".")
        ]
        assert not routable, (
            f"Found routable .py files in api/: {[str(f.relative_to(PROJECT_ROOT)) for f in routable]}."
        )

    def test_no_pyproject_scripts(self):
        content = (PROJECT_ROOT / "pyproject.toml").read_text()
        assert "[project.scripts]" not in content
