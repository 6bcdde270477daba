"""Mixin and column factory enabling user stamping on declarative models."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Column

from userstamp.domain.entities.column_definition import (
    ACCESSOR,
    STORE_USER_ON_CREATE,
    STORE_USER_ON_UPDATE,
)
from userstamp.infrastructure.registry import default_registry


class UserStampMixin:
    """Classify the user stamp columns of every mapped subclass.

    Columns opt in through their ``info`` flags; see :func:`userstamp_column`.
    """


default_registry.listen(UserStampMixin)


def userstamp_column(
    *args: Any,
    on_create: bool = False,
    on_update: bool = False,
    accessor: str | None = None,
    **kwargs: Any,
) -> Column:
    """Return a :class:`~sqlalchemy.Column` flagged for user stamping."""

    info = dict(kwargs.pop("info", None) or {})
    if on_create:
        info[STORE_USER_ON_CREATE] = True
    if on_update:
        info[STORE_USER_ON_UPDATE] = True
    if accessor:
        info[ACCESSOR] = accessor
    return Column(*args, info=info, **kwargs)


__all__ = ["UserStampMixin", "userstamp_column"]
