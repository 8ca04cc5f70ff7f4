"""Registry store layer: identity and group operations over one engine."""

from .accessor import Accessor, make_accessor
from .base import WriteResult, expect_single_row, translate_store_errors
from .codec import decode_attributes, encode_attributes, parse_attributes
from .fields import FieldPatch, IdentityField, SecretPatch, StatePatch, make_patch
from .group_store import GroupRepository, GroupStore
from .identity_store import IdentityRepository, IdentityStore

__all__ = [
    "Accessor", "make_accessor",
    "WriteResult", "expect_single_row", "translate_store_errors",
    "decode_attributes", "encode_attributes", "parse_attributes",
    "FieldPatch", "IdentityField", "SecretPatch", "StatePatch", "make_patch",
    "GroupRepository", "GroupStore",
    "IdentityRepository", "IdentityStore",
]
