from __future__ import annotations

from typing import Any

from bson import ObjectId


def is_valid_object_id(value: Any) -> bool:
    """True when ``value`` is a string the store accepts as a native id."""
    return isinstance(value, str) and ObjectId.is_valid(value)


def to_object_id(value: str) -> ObjectId:
    return ObjectId(value)


def object_id_to_string(value: ObjectId) -> str:
    return str(value)


def map_document(doc: dict[str, Any] | None) -> dict[str, Any] | None:
    """Replace the native ``_id`` with a string ``id`` key."""
    if doc is None:
        return None
    mapped = dict(doc)
    raw_id = mapped.pop("_id", None)
    if raw_id is not None:
        mapped["id"] = object_id_to_string(raw_id)
    return mapped
