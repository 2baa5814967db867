"""Geo group -> $geoWithin/$centerSphere (legacy coordinate pairs)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..exceptions import QueryBuildError
from .groups import OperatorGroup

EARTH_RADIUS_KM = 6378


def compile_geometry(field: str, group: OperatorGroup, val: Any) -> dict[str, Any] | None:
    """Compile a ``geo`` entry ``{"center": [x, y], "radius": km}``.

    The radius is converted to radians for ``$centerSphere``. Returns
    ``None`` when the group is not geo.
    """
    if group != OperatorGroup.GEO:
        return None
    if not isinstance(val, Mapping) or "center" not in val or "radius" not in val:
        raise QueryBuildError(
            f"'geo' value for '{field}' requires 'center' and 'radius'"
        )
    center = val["center"]
    if (
        not isinstance(center, Sequence)
        or isinstance(center, (str, bytes))
        or len(center) != 2
    ):
        raise QueryBuildError(
            f"'geo' center for '{field}' must be a coordinate pair"
        )
    try:
        radians = float(val["radius"]) / EARTH_RADIUS_KM
    except (TypeError, ValueError) as e:
        raise QueryBuildError(f"'geo' radius for '{field}' must be numeric") from e
    return {
        field: {
            "$geoWithin": {
                "$centerSphere": [list(center), radians],
            }
        }
    }
