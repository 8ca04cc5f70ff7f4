"""Patchable identity fields and their typed patch payloads."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Union

from ca_registry.core.exceptions import TypeMismatch, UnsupportedField


class IdentityField(enum.Enum):
    SECRET = "token"
    STATE = "state"


@dataclass(frozen=True)
class SecretPatch:
    value: str

    field = IdentityField.SECRET


@dataclass(frozen=True)
class StatePatch:
    value: int

    field = IdentityField.STATE


FieldPatch = Union[SecretPatch, StatePatch]


def make_patch(field: Any, value: Any) -> FieldPatch:
    """Validate a loosely-typed ``(field, value)`` request into a typed patch.

    Raises :class:`UnsupportedField` for anything outside :class:`IdentityField`
    and :class:`TypeMismatch` when the value does not fit the field.
    """
    if not isinstance(field, IdentityField):
        raise UnsupportedField(field)

    if field is IdentityField.SECRET:
        if not isinstance(value, str):
            raise TypeMismatch(field.name, "str", value)
        return SecretPatch(value)

    # bool is an int subclass but never a valid enrollment state
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeMismatch(field.name, "int", value)
    return StatePatch(value)
