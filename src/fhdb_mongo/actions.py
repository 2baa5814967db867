"""The closed set of fh.db actions and their parameter records.

A descriptor is a loosely-typed mapping such as
``{"act": "read", "type": "users", "guid": "..."}``. :func:`parse_action`
turns it into exactly one of the records below; anything else is an
:class:`~fhdb_mongo.exceptions.UnknownActionError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ParameterError, UnknownActionError
from .operators import OperatorGroup


class Action(str, Enum):
    """Supported values of a descriptor's ``act``."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    DELETEALL = "deleteall"
    LIST = "list"
    INDEX = "index"


# ``act`` values that may omit ``type``. Only ``list`` is an action here;
# the others pass validation and are then rejected as unknown.
TYPELESS_ACTS = frozenset({"close", "list", "export", "import"})

_GROUP_KEYS = frozenset(group.value for group in OperatorGroup)


class ActionRecord(BaseModel):
    """Base for parsed descriptors. ``collection`` is the descriptor's ``type``."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    collection: str | None = Field(default=None, alias="type")

    @classmethod
    def from_descriptor(cls, descriptor: Mapping[str, Any]) -> ActionRecord:
        return cls.model_validate(dict(descriptor))


class CreateAction(ActionRecord):
    fields: Any = None


class ReadAction(ActionRecord):
    guid: Any = None
    fields: Any = None


class UpdateAction(ActionRecord):
    guid: Any = None
    fields: Any = None


class DeleteAction(ActionRecord):
    guid: Any = None


class DeleteAllAction(ActionRecord):
    pass


class ListAction(ActionRecord):
    """List parameters; ``fields`` is a projection, ``groups`` the operator groups."""

    fields: Any = None
    skip: Any = None
    limit: Any = None
    sort: Any = None
    groups: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_descriptor(cls, descriptor: Mapping[str, Any]) -> ActionRecord:
        data = {
            key: value
            for key, value in descriptor.items()
            if key not in _GROUP_KEYS
        }
        data["groups"] = {
            group.value: descriptor[group.value]
            for group in OperatorGroup
            if group.value in descriptor
        }
        return cls.model_validate(data)


class IndexAction(ActionRecord):
    index: Any = None


AnyAction = Union[
    CreateAction,
    ReadAction,
    UpdateAction,
    DeleteAction,
    DeleteAllAction,
    ListAction,
    IndexAction,
]

_RECORDS: dict[Action, type[ActionRecord]] = {
    Action.CREATE: CreateAction,
    Action.READ: ReadAction,
    Action.UPDATE: UpdateAction,
    Action.DELETE: DeleteAction,
    Action.DELETEALL: DeleteAllAction,
    Action.LIST: ListAction,
    Action.INDEX: IndexAction,
}


def parse_action(descriptor: Mapping[str, Any]) -> AnyAction:
    """Resolve ``descriptor["act"]`` and parse the matching record."""
    act = descriptor.get("act")
    try:
        action = Action(act)
    except ValueError as e:
        raise UnknownActionError(act) from e
    try:
        record = _RECORDS[action].from_descriptor(descriptor)
    except ValidationError as e:
        raise ParameterError(f"Invalid params for '{action.value}' action: {e}") from e
    return record  # type: ignore[return-value]
