"""Unit tests for descriptor parsing."""

from __future__ import annotations

import pytest

from fhdb_mongo.actions import (
    Action,
    CreateAction,
    DeleteAllAction,
    IndexAction,
    ListAction,
    ReadAction,
    parse_action,
)
from fhdb_mongo.exceptions import ParameterError, UnknownActionError


def test_parse_read():
    action = parse_action({"act": "read", "type": "users", "guid": "x", "fields": ["a"]})
    assert isinstance(action, ReadAction)
    assert action.collection == "users"
    assert action.guid == "x"
    assert action.fields == ["a"]


def test_parse_ignores_unrelated_keys():
    action = parse_action({"act": "deleteall", "type": "users", "guid": "x"})
    assert isinstance(action, DeleteAllAction)


def test_parse_list_collects_operator_groups():
    action = parse_action(
        {
            "act": "list",
            "type": "users",
            "eq": {"a": 1},
            "in": {"b": [1]},
            "skip": 2,
            "sort": {"a": 1},
        }
    )
    assert isinstance(action, ListAction)
    assert action.groups == {"eq": {"a": 1}, "in": {"b": [1]}}
    assert action.skip == 2
    assert action.sort == {"a": 1}


def test_parse_list_without_type():
    action = parse_action({"act": "list"})
    assert isinstance(action, ListAction)
    assert action.collection is None


def test_every_action_has_a_record():
    for act in Action:
        assert parse_action({"act": act.value, "type": "t"}) is not None


def test_create_and_index_records():
    assert isinstance(parse_action({"act": "create", "type": "t", "fields": {}}), CreateAction)
    assert parse_action({"act": "index", "type": "t", "index": {"a": "ASC"}}) == IndexAction(
        type="t", index={"a": "ASC"}
    )


@pytest.mark.parametrize("act", ["close", "export", "import", "validateOptions", "READ"])
def test_unknown_actions(act):
    with pytest.raises(UnknownActionError, match="Unknown fh.db action"):
        parse_action({"act": act, "type": "t"})


def test_non_string_type_is_a_parameter_error():
    with pytest.raises(ParameterError, match="Invalid params for 'read' action"):
        parse_action({"act": "read", "type": ["t"]})


def test_list_record_carries_compiled_patterns():
    import re

    pattern = re.compile("user", re.IGNORECASE)
    action = parse_action({"act": "list", "type": "t", "like": {"username": pattern}})
    assert action.groups["like"]["username"] is pattern
