from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

import resume_canvas.data.db as app_db
from resume_canvas.data.db import init_db


def _reset_engine() -> None:
    if app_db._engine is not None:
        app_db._engine.dispose()
    app_db._engine = None
    app_db._engine_url = None
    app_db._SessionLocal = None


@pytest.fixture
def api_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Use a temporary SQLite DB and upload directory for API tests."""
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    upload_root = tmp_path / "uploads"
    monkeypatch.setenv("RESUME_CANVAS_UPLOAD_DIR", upload_root.as_posix())
    _reset_engine()
    init_db()
    yield
    # Dispose engine to release connections
    _reset_engine()

