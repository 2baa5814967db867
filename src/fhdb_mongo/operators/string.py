"""Pattern group -> $regex."""

from __future__ import annotations

import re
from typing import Any

from bson.regex import Regex

from ..exceptions import QueryBuildError
from .groups import OperatorGroup


def compile_string(field: str, group: OperatorGroup, val: Any) -> dict[str, Any] | None:
    """Compile a ``like`` entry. Returns None if not a pattern group.

    ``val`` may be a plain string (case-sensitive) or a compiled pattern,
    whose flags (e.g. ``re.IGNORECASE``) MongoDB honours.
    """
    if group != OperatorGroup.LIKE:
        return None
    if not isinstance(val, (str, re.Pattern, Regex)):
        raise QueryBuildError(
            f"'like' value for '{field}' must be a string or regular expression"
        )
    return {field: {"$regex": val}}
