"""Repository implementations for infrastructure layer."""

from .record_repository import RecordRepository

__all__ = ["RecordRepository"]
