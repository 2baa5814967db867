"""Conversion between legacy ``guid`` strings and MongoDB ``_id`` values.

Malformed identifiers are never rejected: they are passed to MongoDB as
plain strings so that a lookup simply finds nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from bson import ObjectId
from bson.errors import InvalidId

ID_FIELD = "_id"
OBJECT_ID_LENGTH = 24


@dataclass(frozen=True)
class NativeId:
    """A guid that parsed as a MongoDB ObjectId."""

    value: ObjectId


@dataclass(frozen=True)
class OpaqueId:
    """A guid that is not an ObjectId; queried verbatim."""

    value: str


Identifier = Union[NativeId, OpaqueId]


def parse_identifier(text: str) -> Identifier:
    try:
        return NativeId(ObjectId(text))
    except (InvalidId, TypeError):
        return OpaqueId(text)


def decode(text: str) -> ObjectId | str:
    """Return ``text`` as an ObjectId, or unchanged when it is not one."""
    return parse_identifier(text).value


def encode(value: Any) -> str:
    """Textual form of any ``_id`` value (ObjectId or otherwise)."""
    return str(value)


def coerce_document_id(doc: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``doc`` with a 24-character string ``_id`` decoded."""
    raw = doc.get(ID_FIELD)
    if isinstance(raw, str) and len(raw) == OBJECT_ID_LENGTH:
        return {**doc, ID_FIELD: decode(raw)}
    return dict(doc)
