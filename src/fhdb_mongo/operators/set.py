"""Set-membership group -> $in."""

from __future__ import annotations

from typing import Any

from .groups import OperatorGroup


def compile_set(field: str, group: OperatorGroup, val: Any) -> dict[str, Any] | None:
    """Compile an ``in`` entry. Returns None if not a set group."""
    if group != OperatorGroup.IN:
        return None
    if isinstance(val, (list, tuple, set, frozenset)):
        return {field: {"$in": list(val)}}
    return {field: {"$in": [val]}}
