"""Core module with logging and the registry exception hierarchy."""

from ca_registry.core.exceptions import (
    AmbiguousRootGroup,
    AuthorizationFailure,
    DuplicateGroup,
    DuplicateIdentity,
    GroupNotFound,
    IdentityNotFound,
    InvalidRecord,
    NotConfigured,
    NotFoundError,
    RegistryError,
    SerializationError,
    StoreError,
    StoreWriteError,
    TypeMismatch,
    UnsupportedField,
)
from ca_registry.core.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "AmbiguousRootGroup",
    "AuthorizationFailure",
    "DuplicateGroup",
    "DuplicateIdentity",
    "GroupNotFound",
    "IdentityNotFound",
    "InvalidRecord",
    "NotConfigured",
    "NotFoundError",
    "RegistryError",
    "SerializationError",
    "StoreError",
    "StoreWriteError",
    "TypeMismatch",
    "UnsupportedField",
]
