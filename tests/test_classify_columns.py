"""Tests for the column classifier."""

from __future__ import annotations

import pytest

from userstamp.application.use_cases import classify_columns
from userstamp.domain.entities import ColumnDefinition, StampPolicy


def _column(name, key=None, **info):
    return ColumnDefinition(name=name, key=key or name, data_type="Integer", info=info)


def test_columns_are_split_by_flag_in_declaration_order():
    policy = classify_columns(
        [
            _column("id"),
            _column("u_updated", store_user_on_create=True, store_user_on_update=True),
            _column("name"),
            _column("u_created", store_user_on_create=True),
            _column("u_touched", store_user_on_update=True),
        ]
    )

    assert policy.on_create == ("u_updated", "u_created")
    assert policy.on_update == ("u_updated", "u_touched")


def test_unflagged_columns_produce_the_empty_policy():
    policy = classify_columns([_column("id"), _column("name")])

    assert policy.is_empty
    assert policy == StampPolicy.empty()
    assert policy.as_dict() == {"on_create": [], "on_update": []}


@pytest.mark.parametrize(
    ("flag", "expected"),
    [
        (True, True),
        (1, True),
        ("yes", True),
        (False, False),
        (0, False),
        ("", False),
        (None, False),
    ],
)
def test_flags_follow_python_truthiness(flag, expected):
    policy = classify_columns(
        [_column("u_created", store_user_on_create=flag, store_user_on_update=flag)]
    )

    assert ("u_created" in policy.on_create) is expected
    assert ("u_created" in policy.on_update) is expected


def test_setter_uses_accessor_then_mapped_key():
    class Record:
        creator = None
        created_by_id = None
        changed_by = None

    policy = classify_columns(
        [
            _column("created_by", key="created_by_id", store_user_on_create=True, accessor="creator"),
            _column("changed_by", store_user_on_update=True, accessor=""),
        ]
    )
    record = Record()

    policy.write(record, "created_by", 4)
    policy.write(record, "changed_by", 5)

    assert record.creator == 4
    assert record.created_by_id is None
    assert record.changed_by == 5
    assert policy.read(record, "created_by") is None


def test_classifying_again_replaces_the_previous_result():
    first = classify_columns([_column("a", store_user_on_create=True)])
    second = classify_columns(
        [_column("a"), _column("b", store_user_on_update=True)]
    )

    assert first.on_create == ("a",)
    assert second.on_create == ()
    assert second.on_update == ("b",)


@pytest.mark.parametrize(
    "fields",
    [
        {"on_create": ("a",)},
        {"on_update": ("a",), "readers": {"a": lambda record: None}},
        {"on_create": ("a",), "setters": {"a": lambda record, value: None}},
    ],
)
def test_policy_rejects_columns_without_reader_and_setter(fields):
    with pytest.raises(ValueError, match="Stamp column 'a' has no reader or setter"):
        StampPolicy(**fields)
