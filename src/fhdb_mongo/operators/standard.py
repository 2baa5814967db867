"""Equality and range groups -> direct match, $ne, $lt, $lte, $gt, $gte."""

from __future__ import annotations

from typing import Any

from .groups import OperatorGroup

_MONGO_OP_MAP: dict[OperatorGroup, str] = {
    OperatorGroup.NE: "$ne",
    OperatorGroup.LT: "$lt",
    OperatorGroup.LE: "$lte",
    OperatorGroup.GT: "$gt",
    OperatorGroup.GE: "$gte",
}


def compile_standard(field: str, group: OperatorGroup, val: Any) -> dict[str, Any] | None:
    """Compile one field of an equality or range group.

    ``eq`` yields the bare value (``{field: val}``); the others yield an
    operator document. Returns ``None`` for groups handled elsewhere.
    """
    if group == OperatorGroup.EQ:
        return {field: val}
    mongo_op = _MONGO_OP_MAP.get(group)
    if mongo_op is None:
        return None
    return {field: {mongo_op: val}}
