"""Use cases implementing column classification and record stamping."""

from .classify_columns import classify_columns
from .stamp_record import stamp_on_create, stamp_on_update

__all__ = ["classify_columns", "stamp_on_create", "stamp_on_update"]
