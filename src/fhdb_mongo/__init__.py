"""fh.db compatibility shim over MongoDB.

Translates legacy fh.db action descriptors (create, read, update, delete,
deleteall, list, index) into Motor operations and normalizes the results
back into fh.db response envelopes.
"""

from __future__ import annotations

from .actions import (
    Action,
    ActionRecord,
    CreateAction,
    DeleteAction,
    DeleteAllAction,
    IndexAction,
    ListAction,
    ReadAction,
    UpdateAction,
    parse_action,
)
from .client import MongoDbClient, get_client
from .config import FhDbSettings, get_settings
from .connection import MongoConnectionManager
from .exceptions import (
    CollectionNameTooLongError,
    DescriptorValidationError,
    FhDbError,
    MongoConnectionError,
    MongoPersistenceError,
    ParameterError,
    QueryBuildError,
    UnknownActionError,
)
from .identifiers import NativeId, OpaqueId, decode, encode, parse_identifier
from .normalizer import normalize, normalize_many
from .query_builder import MongoQueryBuilder

__all__ = [
    # Entry point
    "MongoDbClient",
    "get_client",
    "MongoConnectionManager",
    "FhDbSettings",
    "get_settings",
    # Actions
    "Action",
    "ActionRecord",
    "CreateAction",
    "ReadAction",
    "UpdateAction",
    "DeleteAction",
    "DeleteAllAction",
    "ListAction",
    "IndexAction",
    "parse_action",
    # Translation
    "MongoQueryBuilder",
    "normalize",
    "normalize_many",
    "NativeId",
    "OpaqueId",
    "decode",
    "encode",
    "parse_identifier",
    # Exceptions
    "FhDbError",
    "DescriptorValidationError",
    "ParameterError",
    "CollectionNameTooLongError",
    "QueryBuildError",
    "UnknownActionError",
    "MongoPersistenceError",
    "MongoConnectionError",
]
