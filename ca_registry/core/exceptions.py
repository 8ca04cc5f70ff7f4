"""Exception hierarchy for the identity registry store.

Every error carries a stable ``code`` so front ends (HTTP or CLI) can map
failures without string matching on messages.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class RegistryError(Exception):
    """Base exception for the registry store."""

    def __init__(
        self,
        message: str,
        code: str = "R5000",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class NotConfigured(RegistryError):
    """No backing store was supplied to the accessor."""

    def __init__(self, message: str = "No database engine bound to accessor"):
        super().__init__(message, code="R5001")


class StoreError(RegistryError):
    """Backing store failure that no narrower error describes."""

    def __init__(self, message: str, code: str = "R5100", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class StoreWriteError(StoreError):
    """A write statement did not affect exactly one row."""

    def __init__(self, message: str, rows_affected: Optional[int] = None):
        super().__init__(
            message,
            code="R5101",
            details={"rows_affected": rows_affected} if rows_affected is not None else {},
        )


class AmbiguousRootGroup(StoreError):
    """More than one group has no parent."""

    def __init__(self, message: str = "More than one root group is registered"):
        super().__init__(message, code="R5102")


class SerializationError(RegistryError):
    """Identity attributes could not be encoded for storage."""

    def __init__(self, message: str):
        super().__init__(message, code="R4220")


class InvalidRecord(RegistryError, ValueError):
    """Record failed basic validation before reaching the store."""

    def __init__(self, message: str):
        super().__init__(message, code="R4221")


class DuplicateIdentity(RegistryError):
    """An identity with the same name already exists."""

    def __init__(self, name: str):
        super().__init__(f"Identity ({name}) is already registered", code="R4090", details={"name": name})


class DuplicateGroup(RegistryError):
    """A group with the same name already exists."""

    def __init__(self, name: str):
        super().__init__(f"Group ({name}) already exists", code="R4091", details={"name": name})


class NotFoundError(RegistryError):
    """Requested record does not exist."""

    def __init__(self, message: str = "Record not found", code: str = "R4040", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class IdentityNotFound(NotFoundError):
    def __init__(self, name: str):
        super().__init__(f"Identity ({name}) not found", code="R4041", details={"name": name})


class GroupNotFound(NotFoundError):
    def __init__(self, name: Optional[str] = None):
        message = f"Group ({name}) not found" if name else "Root group not found"
        super().__init__(message, code="R4042", details={"name": name} if name else {})


class UnsupportedField(RegistryError):
    """Field is not one of the patchable identity fields."""

    def __init__(self, field: Any):
        super().__init__(
            "Specified field does not exist or cannot be updated",
            code="R4001",
            details={"field": repr(field)},
        )


class TypeMismatch(RegistryError):
    """Patch value does not have the type the field requires."""

    def __init__(self, field: str, expected: str, actual: Any):
        super().__init__(
            f"Field {field} expects a value of type {expected}, got {type(actual).__name__}",
            code="R4002",
            details={"field": field, "expected": expected},
        )


class AuthorizationFailure(RegistryError):
    """Basic authentication was rejected."""

    def __init__(self, message: str = "Authorization failure"):
        super().__init__(message, code="R2001")
