"""Declarative helpers for models carrying user stamp columns."""

from .mixins import UserStampMixin, userstamp_column

__all__ = ["UserStampMixin", "userstamp_column"]
