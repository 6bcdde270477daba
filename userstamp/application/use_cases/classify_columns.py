"""Use case deriving the stamp policy of a record type from its columns."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from operator import attrgetter
from types import MappingProxyType
from typing import Any

from userstamp.domain.entities import ColumnDefinition, StampPolicy
from userstamp.domain.entities.stamp_policy import Setter

logger = logging.getLogger(__name__)


def _build_setter(accessor: str) -> Setter:
    def setter(instance: Any, value: Any) -> None:
        setattr(instance, accessor, value)

    setter.__name__ = f"set_{accessor}"
    return setter


def classify_columns(
    columns: Iterable[ColumnDefinition], *, owner: str | None = None
) -> StampPolicy:
    """Partition ``columns`` into create-time and update-time stamp lists.

    ``columns`` must be the complete column set of the record type. The
    result is computed from scratch on every call, so redeclaring columns and
    classifying again yields a policy that replaces the previous one.
    """

    on_create: list[str] = []
    on_update: list[str] = []
    readers = {}
    setters = {}

    for column in columns:
        flagged = False
        if column.store_user_on_create:
            on_create.append(column.name)
            flagged = True
        if column.store_user_on_update:
            on_update.append(column.name)
            flagged = True
        if flagged:
            readers[column.name] = attrgetter(column.key)
            setters[column.name] = _build_setter(column.accessor)

    policy = StampPolicy(
        on_create=tuple(on_create),
        on_update=tuple(on_update),
        readers=MappingProxyType(readers),
        setters=MappingProxyType(setters),
    )
    logger.debug(
        "Classified user stamp columns for %s: on_create=%s on_update=%s",
        owner or "<anonymous>",
        list(policy.on_create),
        list(policy.on_update),
    )
    return policy


__all__ = ["classify_columns"]
