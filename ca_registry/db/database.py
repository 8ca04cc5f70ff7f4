"""SQLAlchemy engine management for the registry store."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase

from ca_registry.config import get_settings
from ca_registry.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


_engine: Optional[Engine] = None


def make_engine(database_url: str, echo: bool = False, pool_pre_ping: bool = True) -> Engine:
    """Create an engine with dialect-specific configuration.

    - PostgreSQL: connection pooling with pre-ping
    - SQLite: check_same_thread=False, parent directory created for file databases
    """
    connect_args: dict = {}
    kwargs: dict = {
        "echo": echo,
        "pool_pre_ping": pool_pre_ping,
    }

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    elif url.get_backend_name() == "postgresql":
        kwargs["pool_size"] = 10
        kwargs["max_overflow"] = 20

    kwargs["connect_args"] = connect_args
    return create_engine(url, **kwargs)


def get_engine() -> Engine:
    """Return the process-wide engine, creating it from settings on first use."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = make_engine(
            settings.database_url,
            echo=settings.database_echo,
            pool_pre_ping=settings.pool_pre_ping,
        )
        logger.debug("Database engine created", data={"backend": _engine.dialect.name})
    return _engine


def dispose_engine() -> None:
    """Dispose the process-wide engine so the next call rebuilds it."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None


def create_schema(engine: Engine) -> None:
    """Create the Users and Groups tables if they do not exist."""
    # Models register themselves on Base.metadata at import time
    from ca_registry.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def verify_database_connection(engine: Optional[Engine] = None) -> bool:
    """Run a trivial query to check the store is reachable."""
    engine = engine or get_engine()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as exc:
        logger.error(f"Database connectivity check failed: {type(exc).__name__}: {exc}")
        return False
    return True
