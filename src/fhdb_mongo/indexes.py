"""Index helpers — legacy direction tokens to compound index keys."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING, DESCENDING, GEO2D

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

INDEX_TYPES: dict[str, int | str] = {
    "ASC": ASCENDING,
    "DESC": DESCENDING,
    "2D": GEO2D,
}


def index_keys(spec: Mapping[str, Any]) -> list[tuple[str, int | str]]:
    """``{field: "ASC" | "DESC" | "2D"}`` -> ``[(field, 1 | -1 | "2d"), ...]``.

    Tokens are case-insensitive; unrecognised ones mean ascending. Key order
    is preserved (MongoDB requires a 2d key to come first).
    """
    return [
        (field, INDEX_TYPES.get(str(token).upper(), ASCENDING))
        for field, token in spec.items()
    ]


async def create_compound_index(
    collection: AsyncIOMotorCollection[Any],
    keys: list[tuple[str, int | str]],
) -> str:
    """Create a compound index. Returns the index name MongoDB assigned."""
    return await collection.create_index(keys)
