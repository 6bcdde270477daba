"""Helpers translating SQLAlchemy mappers and instance state into domain terms."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Column, inspect
from sqlalchemy.orm import Mapper
from sqlalchemy.orm.exc import UnmappedColumnError

from userstamp.domain.entities import ColumnDefinition


def describe_columns(mapper: Mapper) -> list[ColumnDefinition]:
    """Return the mapped columns of ``mapper`` in declaration order.

    Inherited columns come first. A column mapped under several tables
    (joined inheritance primary keys) is reported once.
    """

    definitions: list[ColumnDefinition] = []
    seen: set[str] = set()
    for column in mapper.persist_selectable.columns:
        if not isinstance(column, Column):
            continue
        try:
            prop = mapper.get_property_by_column(column)
        except UnmappedColumnError:
            continue
        if prop.key in seen:
            continue
        seen.add(prop.key)
        definitions.append(
            ColumnDefinition(
                name=column.name,
                key=prop.key,
                data_type=type(column.type).__name__,
                info=dict(column.info),
            )
        )
    return definitions


def modified_columns(instance: Any) -> frozenset[str]:
    """Return the names of the columns changed on ``instance`` since load.

    Attribute history is inspected without emitting SQL. A column set back
    to its loaded value does not count as changed.
    """

    state = inspect(instance)
    dirty: set[str] = set()
    for prop in state.mapper.column_attrs:
        if state.attrs[prop.key].history.has_changes():
            dirty.update(
                column.name for column in prop.columns if isinstance(column, Column)
            )
    return frozenset(dirty)


__all__ = ["describe_columns", "modified_columns"]
