"""Operator-group compilers for the list query builder."""

from __future__ import annotations

from .geometry import EARTH_RADIUS_KM, compile_geometry
from .groups import GROUP_ORDER, OperatorGroup
from .set import compile_set
from .standard import compile_standard
from .string import compile_string

__all__ = [
    "EARTH_RADIUS_KM",
    "GROUP_ORDER",
    "OperatorGroup",
    "compile_standard",
    "compile_string",
    "compile_set",
    "compile_geometry",
]
