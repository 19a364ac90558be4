"""Runtime configuration read from environment variables.

Values are resolved at call time so tests can override them with
``monkeypatch.setenv``. Malformed numeric overrides fall back to the
defaults in :mod:`resume_canvas.constants.canvas_constants`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from resume_canvas.constants.canvas_constants import (
    AUTOSAVE_QUIESCENCE_SECONDS,
    PAYLOAD_LIMIT_BYTES,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000/api"


@dataclass(frozen=True)
class EditorSettings:
    """Tunables for the autosave engine.

    The persistence clients resolve their base URL with :func:`get_api_url`.
    """

    quiescence_seconds: float = AUTOSAVE_QUIESCENCE_SECONDS
    payload_limit_bytes: int = PAYLOAD_LIMIT_BYTES


def get_project_root() -> Path:
    """Return the repository root (the directory holding ``src/``)."""
    return Path(__file__).resolve().parents[2]


def get_api_url() -> str:
    """Return the persistence API base URL without a trailing slash."""
    return os.getenv("RESUME_CANVAS_API_URL", DEFAULT_API_URL).rstrip("/")


def _read_positive_number(name: str, default: float, cast: type) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r; using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r; using %s", name, raw, default)
        return default
    return value


def load_editor_settings() -> EditorSettings:
    """Build :class:`EditorSettings` from the current environment."""
    return EditorSettings(
        quiescence_seconds=_read_positive_number(
            "RESUME_CANVAS_AUTOSAVE_SECONDS", AUTOSAVE_QUIESCENCE_SECONDS, float
        ),
        payload_limit_bytes=int(
            _read_positive_number("RESUME_CANVAS_PAYLOAD_LIMIT_BYTES", PAYLOAD_LIMIT_BYTES, int)
        ),
    )
