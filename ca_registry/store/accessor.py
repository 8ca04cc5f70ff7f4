"""Accessor combining the identity and group stores over one engine."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Engine

from ca_registry.db.database import get_engine
from ca_registry.store.group_store import GroupStore
from ca_registry.store.identity_store import IdentityStore


class Accessor(IdentityStore, GroupStore):
    """Registry accessor.

    Holds nothing but the engine: every read goes to the database and every
    write commits before the call returns.
    """

    def __repr__(self) -> str:
        return f"<Accessor {self.engine.url.render_as_string(hide_password=True)}>"


def make_accessor(engine: Optional[Engine] = None) -> Accessor:
    """Build an accessor over ``engine`` or the settings-configured engine."""
    return Accessor(engine if engine is not None else get_engine())
