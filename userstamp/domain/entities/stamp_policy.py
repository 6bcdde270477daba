"""Domain entity holding the stamping triggers of a record type."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

Reader = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]


@dataclass(frozen=True)
class StampPolicy:
    """Columns stamped on create and on update, in declaration order.

    ``readers`` and ``setters`` map every listed column name to the callables
    used to read its current value and to write the acting user id.
    """

    on_create: tuple[str, ...] = ()
    on_update: tuple[str, ...] = ()
    readers: Mapping[str, Reader] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )
    setters: Mapping[str, Setter] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for column in (*self.on_create, *self.on_update):
            if column not in self.readers or column not in self.setters:
                msg = f"Stamp column '{column}' has no reader or setter"
                raise ValueError(msg)

    @classmethod
    def empty(cls) -> StampPolicy:
        return _EMPTY

    @property
    def is_empty(self) -> bool:
        return not self.on_create and not self.on_update

    def read(self, instance: Any, column: str) -> Any:
        return self.readers[column](instance)

    def write(self, instance: Any, column: str, value: Any) -> None:
        self.setters[column](instance, value)

    def as_dict(self) -> dict[str, list[str]]:
        return {"on_create": list(self.on_create), "on_update": list(self.on_update)}


_EMPTY = StampPolicy()


__all__ = ["Reader", "Setter", "StampPolicy"]
