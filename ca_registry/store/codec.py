"""JSON encoding of identity attribute lists for the ``Users.attributes`` column."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ca_registry.core.exceptions import SerializationError
from ca_registry.core.logging import get_logger
from ca_registry.schemas import Attribute

logger = get_logger(__name__)

_attribute_list = TypeAdapter(List[Attribute])


def encode_attributes(attributes: Optional[Iterable[Any]]) -> str:
    """Serialize an ordered attribute list; entries may be models or mappings."""
    try:
        validated = _attribute_list.validate_python(list(attributes or []))
        return _attribute_list.dump_json(validated, exclude_none=True).decode("utf-8")
    except (ValidationError, PydanticSerializationError, TypeError) as exc:
        raise SerializationError(f"Failed to encode identity attributes: {exc}") from exc


def decode_attributes(blob: Optional[str]) -> List[Attribute]:
    """Rehydrate a stored attribute blob.

    Blobs are caller-controlled, so anything undecodable yields an empty list
    instead of failing the read.
    """
    if not blob:
        return []
    try:
        return _attribute_list.validate_json(blob)
    except ValidationError as exc:
        logger.warning(
            "Discarding undecodable attribute blob",
            data={"errors": exc.error_count()},
        )
        return []


def parse_attributes(blob: str) -> List[Attribute]:
    """Decode operator-supplied attribute JSON, failing on anything malformed."""
    try:
        return _attribute_list.validate_json(blob)
    except ValidationError as exc:
        raise SerializationError(f"Invalid attribute list: {exc}") from exc
