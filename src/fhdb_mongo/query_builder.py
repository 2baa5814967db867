"""Mongo query builder from fh.db operator groups."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .exceptions import QueryBuildError
from .operators import (
    GROUP_ORDER,
    OperatorGroup,
    compile_geometry,
    compile_set,
    compile_standard,
    compile_string,
)

_COMPILERS = [
    compile_standard,
    compile_string,
    compile_set,
    compile_geometry,
]


def _compile_entry(field: str, group: OperatorGroup, val: Any) -> dict[str, Any]:
    for compiler in _COMPILERS:
        result = compiler(field, group, val)
        if result is not None:
            return result
    raise QueryBuildError(f"No compiler for operator group '{group.value}'")


def _merge(query: dict[str, Any], fragment: dict[str, Any]) -> None:
    """Fold operator clauses into the per-field documents already in ``query``.

    A field already pinned to a scalar by ``eq`` keeps its equality match.
    """
    for field, clause in fragment.items():
        if field not in query:
            query[field] = dict(clause)
            continue
        existing = query[field]
        if isinstance(existing, Mapping):
            query[field] = {**existing, **clause}


class MongoQueryBuilder:
    """Compiles fh.db descriptor fragments to MongoDB query documents."""

    def build_match(self, groups: Mapping[str, Any]) -> dict[str, Any]:
        """Build one conjunctive filter from the operator groups in ``groups``.

        ``groups`` is usually the whole descriptor; keys that are not operator
        groups are ignored. ``eq`` assigns values directly (replacing any
        clause for that field); every other group merges into the field's
        operator document so that e.g. ``ge`` and ``le`` form one range.
        """
        query: dict[str, Any] = {}
        for group in GROUP_ORDER:
            fields = groups.get(group.value)
            if not fields:
                continue
            if not isinstance(fields, Mapping):
                raise QueryBuildError(
                    f"Operator group '{group.value}' must map field names to values"
                )
            for field, val in fields.items():
                fragment = _compile_entry(field, group, val)
                if group == OperatorGroup.EQ:
                    query.update(fragment)
                else:
                    _merge(query, fragment)
        return query

    def build_sort(self, sort: Any) -> list[tuple[str, int]]:
        """Build MongoDB sort tuples from ``{field: 1 | -1}``, keeping key order."""
        if not sort or not isinstance(sort, Mapping):
            return []
        return [(field, direction) for field, direction in sort.items()]

    def build_project(self, fields: Any) -> dict[str, int] | None:
        """Inclusion projection ``{field: 1, ...}``. None means no projection."""
        if not fields:
            return None
        if isinstance(fields, str):
            fields = [fields]
        return dict.fromkeys(fields, 1)
