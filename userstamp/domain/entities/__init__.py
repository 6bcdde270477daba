"""Domain entities exposed by the package."""

from .column_definition import ColumnDefinition
from .stamp_policy import StampPolicy

__all__ = ["ColumnDefinition", "StampPolicy"]
