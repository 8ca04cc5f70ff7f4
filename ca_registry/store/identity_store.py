"""Identity (``Users`` table) operations."""

from __future__ import annotations

import secrets
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import Row, delete, insert, select, update

from ca_registry.core.exceptions import (
    AuthorizationFailure,
    DuplicateIdentity,
    IdentityNotFound,
    InvalidRecord,
    UnsupportedField,
)
from ca_registry.core.logging import get_logger
from ca_registry.db.models import UserRecord
from ca_registry.schemas import Identity
from ca_registry.store.base import EngineBound, WriteResult
from ca_registry.store.codec import decode_attributes, encode_attributes
from ca_registry.store.fields import FieldPatch, SecretPatch, StatePatch, make_patch

logger = get_logger(__name__)

users = UserRecord.__table__


@runtime_checkable
class IdentityRepository(Protocol):
    def insert_identity(self, identity: Identity) -> WriteResult: ...
    def update_identity(self, identity: Identity) -> WriteResult: ...
    def update_field(self, name: str, field: Any, value: Any) -> WriteResult: ...
    def apply_patch(self, name: str, patch: FieldPatch) -> WriteResult: ...
    def update_credential(self, name: str, serial_number: str, authority_key_identifier: str) -> WriteResult: ...
    def delete_identity(self, name: str) -> WriteResult: ...
    def get_identity(self, name: str) -> Identity: ...
    def authenticate_basic(self, name: str, secret: str) -> Identity: ...


def _to_identity(row: Row) -> Identity:
    rec = row._mapping
    return Identity(
        name=rec["id"],
        secret=rec["token"] or "",
        type=rec["type"] or "",
        attributes=decode_attributes(rec["attributes"]),
        state=rec["state"] or 0,
        serial_number=rec["serial_number"] or "",
        authority_key_identifier=rec["authority_key_identifier"] or "",
    )


class IdentityStore(EngineBound):
    """CRUD and basic-auth checks for enrollment identities."""

    def insert_identity(self, identity: Identity) -> WriteResult:
        logger.debug(f"DB: Insert identity ({identity.name}) to database")
        if not identity.name:
            raise InvalidRecord("Identity name must not be empty")

        attributes = encode_attributes(identity.attributes)
        stmt = insert(users).values(
            id=identity.name,
            token=identity.secret,
            type=identity.type,
            attributes=attributes,
            state=identity.state,
            serial_number=identity.serial_number,
            authority_key_identifier=identity.authority_key_identifier,
        )
        result = self._write(
            stmt,
            action="insert the identity record",
            duplicate=lambda: DuplicateIdentity(identity.name),
        )
        logger.debug(f"Identity ({identity.name}) inserted into database successfully")
        return result

    def update_identity(self, identity: Identity) -> WriteResult:
        """Replace secret, type and attributes of an existing identity."""
        logger.debug(f"DB: Update identity ({identity.name}) in database")
        attributes = encode_attributes(identity.attributes)
        stmt = (
            update(users)
            .where(users.c.id == identity.name)
            .values(token=identity.secret, type=identity.type, attributes=attributes)
        )
        return self._write(
            stmt,
            action="update the identity record",
            missing=lambda: IdentityNotFound(identity.name),
        )

    def update_field(self, name: str, field: Any, value: Any) -> WriteResult:
        """Patch one column; only :class:`IdentityField` members are accepted."""
        return self.apply_patch(name, make_patch(field, value))

    def apply_patch(self, name: str, patch: FieldPatch) -> WriteResult:
        if not isinstance(patch, (SecretPatch, StatePatch)):
            logger.error("DB: Specified field does not exist or cannot be updated")
            raise UnsupportedField(patch)

        column = patch.field.value
        logger.debug(f"DB: Updating field: {column}")
        stmt = update(users).where(users.c.id == name).values({column: patch.value})
        return self._write(
            stmt,
            action=f"update the identity {column}",
            missing=lambda: IdentityNotFound(name),
        )

    def update_credential(self, name: str, serial_number: str, authority_key_identifier: str) -> WriteResult:
        """Record the serial number and AKI of the latest certificate issued to ``name``."""
        logger.debug(f"DB: Update credential identifiers for identity ({name})")
        stmt = (
            update(users)
            .where(users.c.id == name)
            .values(serial_number=serial_number, authority_key_identifier=authority_key_identifier)
        )
        return self._write(
            stmt,
            action="update the identity credential",
            missing=lambda: IdentityNotFound(name),
        )

    def delete_identity(self, name: str) -> WriteResult:
        """Delete by key. Deleting an unknown identity is a successful no-op."""
        logger.debug(f"DB: Delete identity ({name})")
        return self._write(
            delete(users).where(users.c.id == name),
            action="delete the identity record",
            single_row=False,
        )

    def get_identity(self, name: str) -> Identity:
        logger.debug(f"DB: Get identity ({name}) from database")
        rows = self._fetch(select(users).where(users.c.id == name), action="fetch the identity record")
        if not rows:
            raise IdentityNotFound(name)
        return _to_identity(rows[0])

    def authenticate_basic(self, name: str, secret: str) -> Identity:
        """Check an enrollment secret.

        The secret is single use: once the identity has enrolled (nonzero
        state) a matching secret is rejected too.
        """
        logger.debug(f"DB: Login identity authentication for {name}")
        try:
            identity = self.get_identity(name)
        except IdentityNotFound as exc:
            logger.error(f"Identity ({name}) not registered")
            raise AuthorizationFailure(f"Authentication failed for identity ({name})") from exc

        if not secrets.compare_digest(identity.secret.encode("utf-8"), secret.encode("utf-8")):
            logger.error(f"Incorrect secret provided for identity ({name})")
            raise AuthorizationFailure(f"Incorrect secret provided for identity ({name})")

        if identity.is_enrolled:
            logger.error(f"Identity ({name}) has already been enrolled")
            raise AuthorizationFailure("Identity has already been enrolled")

        return identity
