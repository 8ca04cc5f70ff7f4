"""SQLAlchemy table models for identities and groups."""

from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ca_registry.db.database import Base


class UserRecord(Base):
    """Enrollment identity row."""

    __tablename__ = "Users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    token: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    attributes: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    state: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    serial_number: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    authority_key_identifier: Mapped[str] = mapped_column(String(128), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<UserRecord {self.id}>"


class GroupRecord(Base):
    """Group row; a NULL ``parent_id`` marks a root group."""

    __tablename__ = "Groups"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    parent_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    def __repr__(self) -> str:
        return f"<GroupRecord {self.name}>"
