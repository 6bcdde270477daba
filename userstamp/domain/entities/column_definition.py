"""Domain entity describing a declared column of a record type."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

STORE_USER_ON_CREATE = "store_user_on_create"
STORE_USER_ON_UPDATE = "store_user_on_update"
ACCESSOR = "accessor"


@dataclass(frozen=True)
class ColumnDefinition:
    """Name, mapped attribute and metadata of one column."""

    name: str
    key: str
    data_type: str | None = None
    info: Mapping[str, Any] = field(default_factory=dict)

    @property
    def store_user_on_create(self) -> bool:
        return bool(self.info.get(STORE_USER_ON_CREATE))

    @property
    def store_user_on_update(self) -> bool:
        return bool(self.info.get(STORE_USER_ON_UPDATE))

    @property
    def accessor(self) -> str:
        """Attribute written when the column is stamped.

        Falls back to the mapped attribute, which is the column name unless
        the model maps it under another key.
        """

        return self.info.get(ACCESSOR) or self.key


__all__ = [
    "ACCESSOR",
    "ColumnDefinition",
    "STORE_USER_ON_CREATE",
    "STORE_USER_ON_UPDATE",
]
