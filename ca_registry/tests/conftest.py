"""Registry test fixtures: a fresh SQLite file database per test."""

from __future__ import annotations

from pathlib import Path

import pytest

from ca_registry.config import get_settings
from ca_registry.db.database import create_schema, dispose_engine, make_engine
from ca_registry.schemas import Attribute, Identity
from ca_registry.store import Accessor


@pytest.fixture
def engine(tmp_path: Path):
    """Engine over a temporary SQLite file with the schema created."""
    eng = make_engine(f"sqlite:///{(tmp_path / 'registry.db').as_posix()}")
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def accessor(engine) -> Accessor:
    return Accessor(engine)


@pytest.fixture
def alice() -> Identity:
    return Identity(
        name="alice",
        secret="s3cr3t",
        type="client",
        attributes=[Attribute(name="hf.Registrar.Roles", value="client")],
    )


@pytest.fixture
def settings_env(tmp_path: Path, monkeypatch):
    """Point settings-driven code at a temporary database; returns its URL."""
    db_url = f"sqlite:///{(tmp_path / 'settings.db').as_posix()}"
    monkeypatch.setenv("REGISTRY_DATABASE_URL", db_url)
    get_settings.cache_clear()
    dispose_engine()
    yield db_url
    get_settings.cache_clear()
    dispose_engine()
