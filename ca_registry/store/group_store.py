"""Group (``Groups`` table) operations."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from sqlalchemy import Row, delete, insert, or_, select

from ca_registry.core.exceptions import (
    AmbiguousRootGroup,
    DuplicateGroup,
    GroupNotFound,
    InvalidRecord,
)
from ca_registry.core.logging import get_logger
from ca_registry.db.models import GroupRecord
from ca_registry.schemas import Group
from ca_registry.store.base import EngineBound, WriteResult

logger = get_logger(__name__)

groups = GroupRecord.__table__


@runtime_checkable
class GroupRepository(Protocol):
    def insert_group(self, name: str, parent_name: Optional[str] = None) -> WriteResult: ...
    def delete_group(self, name: str) -> WriteResult: ...
    def get_group(self, name: str) -> Group: ...
    def get_root_group(self) -> Group: ...


def _to_group(row: Row) -> Group:
    rec = row._mapping
    return Group(name=rec["name"], parent_name=rec["parent_id"])


class GroupStore(EngineBound):
    """Groups arranged as a parent-pointer tree. Cycles are not detected."""

    def insert_group(self, name: str, parent_name: Optional[str] = None) -> WriteResult:
        logger.debug(f"DB: Insert group ({name})")
        if not name:
            raise InvalidRecord("Group name must not be empty")
        stmt = insert(groups).values(name=name, parent_id=parent_name or None)
        return self._write(
            stmt,
            action="insert the group record",
            duplicate=lambda: DuplicateGroup(name),
        )

    def delete_group(self, name: str) -> WriteResult:
        """Delete by key. Deleting an unknown group is a successful no-op."""
        logger.debug(f"DB: Delete group ({name})")
        return self._write(
            delete(groups).where(groups.c.name == name),
            action="delete the group record",
            single_row=False,
        )

    def get_group(self, name: str) -> Group:
        logger.debug(f"DB: Get group ({name})")
        rows = self._fetch(select(groups).where(groups.c.name == name), action="fetch the group record")
        if not rows:
            raise GroupNotFound(name)
        return _to_group(rows[0])

    def get_root_group(self) -> Group:
        """Return the single group without a parent.

        Raises :class:`GroupNotFound` when there is none and
        :class:`AmbiguousRootGroup` when several groups claim to be root.
        """
        logger.debug("DB: Get root group")
        # Empty-string parents are treated as root as well as NULL ones
        stmt = (
            select(groups)
            .where(or_(groups.c.parent_id.is_(None), groups.c.parent_id == ""))
            .limit(2)
        )
        rows = self._fetch(stmt, action="fetch the root group")
        if not rows:
            raise GroupNotFound()
        if len(rows) > 1:
            logger.error("More than one root group is registered")
            raise AmbiguousRootGroup()
        return _to_group(rows[0])
