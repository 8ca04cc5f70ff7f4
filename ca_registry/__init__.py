"""Identity and group registry store for a certificate-issuing authority.

The :class:`~ca_registry.store.Accessor` is the entry point: it wraps one
SQLAlchemy engine and exposes the identity and group operations the
authority needs before issuing credentials.
"""

from ca_registry.core.exceptions import RegistryError
from ca_registry.schemas import Attribute, Group, Identity
from ca_registry.store import Accessor, IdentityField, make_accessor

__all__ = [
    "Accessor",
    "Attribute",
    "Group",
    "Identity",
    "IdentityField",
    "RegistryError",
    "make_accessor",
]

__version__ = "0.1.0"
