"""Shared pytest fixtures."""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, text

from sqlitejson.config import Settings, reset_settings
from sqlitejson.logging_config import setup_logging

PRESIDENTS = [
    {"name": "Washington", "id": 1},
    {"name": "Adams", "id": 2},
    {"name": "Jefferson", "id": 3},
    {"name": "Madison", "id": 4},
    {"name": "Monroe", "id": 5},
    {"name": "Adams", "id": 6},
]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep user config files and environment out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in ("LOG_LEVEL", "LOG_FORMAT", "JSON_INDENT", "DATABASE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    reset_settings()
    setup_logging()
    yield
    reset_settings()


@pytest.fixture
def presidents() -> list[dict]:
    """Rows of the presidents table, in insertion order."""
    return [dict(row) for row in PRESIDENTS]


@pytest.fixture
def presidents_db(tmp_path) -> Path:
    """SQLite database file with a single ``presidents`` table."""
    db_path = tmp_path / "presidents.db"
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE presidents (name TEXT, id INT)"))
        conn.execute(text("INSERT INTO presidents VALUES (:name, :id)"), PRESIDENTS)
    engine.dispose()
    return db_path


@pytest.fixture
def blob_db(tmp_path) -> Path:
    """SQLite database file holding a BLOB column."""
    db_path = tmp_path / "blobs.db"
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE files (name TEXT, data BLOB)"))
        conn.execute(
            text("INSERT INTO files VALUES (:name, :data)"),
            {"name": "logo.png", "data": b"\x89PNG\x00\x01"},
        )
    engine.dispose()
    return db_path


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults only."""
    return Settings()
