"""MongoDB documents -> legacy fh.db response envelopes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .identifiers import ID_FIELD, encode


def normalize(document: Mapping[str, Any] | None, type_name: str | None) -> dict[str, Any]:
    """Build ``{type, guid, fields}`` for ``document``.

    Returns ``{}`` when there is no document. ``type``/``guid`` are set only
    when the document carries an ``_id``; ``fields`` only when at least one
    other field remains. Field order follows the document.
    """
    envelope: dict[str, Any] = {}
    if not document:
        return envelope
    if document.get(ID_FIELD) is not None:
        envelope["type"] = type_name
        envelope["guid"] = encode(document[ID_FIELD])
    fields = {key: value for key, value in document.items() if key != ID_FIELD}
    if fields:
        envelope["fields"] = fields
    return envelope


def normalize_many(
    documents: Iterable[Mapping[str, Any]], type_name: str | None
) -> dict[str, Any]:
    """Build the ``{count, list}`` response for a list action."""
    envelopes = [normalize(doc, type_name) for doc in documents]
    return {"count": len(envelopes), "list": envelopes}
