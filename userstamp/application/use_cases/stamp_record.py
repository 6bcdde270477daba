"""Use cases writing the acting user id into a record before it is saved."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from userstamp.domain.entities import StampPolicy


def stamp_on_create(instance: Any, policy: StampPolicy, user_id: Any) -> list[str]:
    """Fill the create-time columns of a new record.

    Columns already holding a value are left alone, whatever that value is.
    ``user_id`` is written as given, ``None`` included. Returns the names of
    the columns that were written.
    """

    stamped: list[str] = []
    for column in policy.on_create:
        if policy.read(instance, column) is not None:
            continue
        policy.write(instance, column, user_id)
        stamped.append(column)
    return stamped


def stamp_on_update(
    instance: Any,
    policy: StampPolicy,
    user_id: Any,
    dirty_columns: Collection[str],
) -> list[str]:
    """Fill the update-time columns of a modified record.

    A column the caller changed since load (present in ``dirty_columns``)
    keeps the caller's value. Every other listed column is overwritten even
    when it already holds a value; unlike creation, only dirtiness counts.
    """

    stamped: list[str] = []
    for column in policy.on_update:
        if column in dirty_columns:
            continue
        policy.write(instance, column, user_id)
        stamped.append(column)
    return stamped


__all__ = ["stamp_on_create", "stamp_on_update"]
