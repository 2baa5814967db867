"""One coroutine per fh.db action, run against a Motor database handle.

Each handler returns the legacy response payload. Parameter problems raise
:class:`~fhdb_mongo.exceptions.ParameterError`; driver errors propagate
unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .actions import (
    AnyAction,
    CreateAction,
    DeleteAction,
    DeleteAllAction,
    IndexAction,
    ListAction,
    ReadAction,
    UpdateAction,
)
from .exceptions import ParameterError
from .identifiers import ID_FIELD, coerce_document_id, decode
from .indexes import create_compound_index, index_keys
from .normalizer import normalize, normalize_many
from .query_builder import MongoQueryBuilder

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

logger = logging.getLogger("fhdb.handlers")

_query_builder = MongoQueryBuilder()


def _collection(
    db: AsyncIOMotorDatabase[Any], action: AnyAction
) -> AsyncIOMotorCollection[Any]:
    if not action.collection:
        raise ParameterError("'type' undefined in params")
    return db.get_collection(action.collection)


def _id_filter(guid: Any) -> dict[str, Any]:
    return {ID_FIELD: decode(guid)}


async def create(db: AsyncIOMotorDatabase[Any], action: CreateAction) -> dict[str, Any]:
    """Insert one document or many; echo a single insert back as an envelope."""
    fields = action.fields
    if isinstance(fields, Mapping):
        fields = [fields]
    if (
        not isinstance(fields, list)
        or not fields
        or not all(isinstance(doc, Mapping) and doc for doc in fields)
    ):
        raise ParameterError(
            "Fields need to be set as an object or array for 'create' action."
        )
    docs = [coerce_document_id(dict(doc)) for doc in fields]
    result = await _collection(db, action).insert_many(docs)
    count = len(result.inserted_ids)
    if count == 1:
        return normalize(
            {**docs[0], ID_FIELD: result.inserted_ids[0]}, action.collection
        )
    return {"Status": "OK", "Count": count}


async def read(db: AsyncIOMotorDatabase[Any], action: ReadAction) -> dict[str, Any]:
    """Load one document by guid, optionally projected to ``fields``."""
    if not action.guid:
        return {}
    projection = _query_builder.build_project(action.fields)
    doc = await _collection(db, action).find_one(_id_filter(action.guid), projection)
    return normalize(doc, action.collection)


async def list_(db: AsyncIOMotorDatabase[Any], action: ListAction) -> dict[str, Any]:
    """Query with the operator groups, honouring sort, skip, limit and projection."""
    coll = _collection(db, action)
    query = _query_builder.build_match(action.groups)
    kwargs: dict[str, Any] = {}
    projection = _query_builder.build_project(action.fields)
    if projection:
        kwargs["projection"] = projection
    if _is_int(action.skip) and action.skip >= 0:
        kwargs["skip"] = action.skip
    if _is_int(action.limit) and action.limit > 0:
        kwargs["limit"] = action.limit
    sort = _query_builder.build_sort(action.sort)
    if sort:
        kwargs["sort"] = sort
    logger.debug("list %s filter=%r options=%r", action.collection, query, kwargs)
    docs = [doc async for doc in coll.find(query, **kwargs)]
    return normalize_many(docs, action.collection)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


async def update(db: AsyncIOMotorDatabase[Any], action: UpdateAction) -> dict[str, Any]:
    """Replace the whole document, then return it as re-read from the store."""
    if not action.fields or not isinstance(action.fields, Mapping):
        raise ParameterError("Invalid Params - 'fields' object required")
    if not action.guid:
        raise ParameterError("Invalid Params - 'guid' is required")
    await _collection(db, action).find_one_and_replace(
        _id_filter(action.guid), dict(action.fields)
    )
    # TODO: build the envelope from find_one_and_replace(return_document=AFTER)
    # instead of issuing a second read.
    return await read(db, ReadAction(type=action.collection, guid=action.guid))


async def delete(db: AsyncIOMotorDatabase[Any], action: DeleteAction) -> dict[str, Any]:
    """Remove one document by guid; return it as it was before removal."""
    if not action.guid:
        return {}
    doc = await _collection(db, action).find_one_and_delete(_id_filter(action.guid))
    return normalize(doc, action.collection)


async def deleteall(
    db: AsyncIOMotorDatabase[Any], action: DeleteAllAction
) -> dict[str, Any]:
    result = await _collection(db, action).delete_many({})
    return {"status": "ok", "count": result.deleted_count}


async def index(db: AsyncIOMotorDatabase[Any], action: IndexAction) -> dict[str, Any]:
    """Create a compound index from ``{field: "ASC" | "DESC" | "2D"}``."""
    if not action.index or not isinstance(action.index, Mapping):
        raise ParameterError(
            "Invalid Params - 'index' object required for index action."
        )
    keys = index_keys(action.index)
    index_name = await create_compound_index(_collection(db, action), keys)
    return {"status": "OK", "indexName": index_name}


async def execute(db: AsyncIOMotorDatabase[Any], action: AnyAction) -> dict[str, Any]:
    """Run the handler for ``action``."""
    match action:
        case CreateAction():
            return await create(db, action)
        case ReadAction():
            return await read(db, action)
        case UpdateAction():
            return await update(db, action)
        case DeleteAction():
            return await delete(db, action)
        case DeleteAllAction():
            return await deleteall(db, action)
        case ListAction():
            return await list_(db, action)
        case IndexAction():
            return await index(db, action)
    raise TypeError(f"Unsupported action record: {type(action).__name__}")
