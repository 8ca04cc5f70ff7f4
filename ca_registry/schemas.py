"""Typed records returned by and accepted by the registry store."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ModelWrapValidatorHandler,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)


class Attribute(BaseModel):
    """One caller-owned identity attribute; ``ecert`` is the optional per-entry flag.

    Keys beyond name/value/ecert are carried through untouched, and an entry
    written with ``attr`` as its name key is serialized back with ``attr``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(validation_alias=AliasChoices("name", "attr"))
    value: str
    ecert: Optional[bool] = None

    _name_key: str = PrivateAttr(default="name")

    @model_validator(mode="wrap")
    @classmethod
    def remember_name_key(cls, data: Any, handler: ModelWrapValidatorHandler[Attribute]) -> Attribute:
        attribute = handler(data)
        if isinstance(data, dict) and "attr" in data and "name" not in data:
            attribute._name_key = "attr"
        return attribute

    @model_serializer(mode="wrap")
    def restore_name_key(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        dumped = handler(self)
        if self._name_key == "name":
            return dumped
        return {self._name_key if key == "name" else key: value for key, value in dumped.items()}


class Identity(BaseModel):
    """Enrollment identity as stored in the ``Users`` table.

    ``state == 0`` means the identity has not enrolled yet and may authenticate
    with ``secret``; any other value means enrollment already happened.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    secret: str = Field(default="", repr=False)
    type: str = ""
    attributes: List[Attribute] = Field(default_factory=list)
    state: int = 0
    serial_number: str = ""
    authority_key_identifier: str = ""

    @property
    def is_enrolled(self) -> bool:
        return self.state != 0


class Group(BaseModel):
    """Group in the parent-pointer hierarchy; no parent means root."""

    model_config = ConfigDict(extra="forbid")

    name: str
    parent_name: Optional[str] = None

    @field_validator("parent_name")
    @classmethod
    def empty_parent_is_root(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def is_root(self) -> bool:
        return self.parent_name is None
