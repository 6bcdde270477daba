"""Automatically record the acting user on SQLAlchemy inserts and updates."""

from userstamp.application.use_cases import (
    classify_columns,
    stamp_on_create,
    stamp_on_update,
)
from userstamp.domain.entities import ColumnDefinition, StampPolicy
from userstamp.infrastructure.current_user import (
    acting_user,
    context_user_id,
    session_user_id,
)
from userstamp.infrastructure.mapping import describe_columns, modified_columns
from userstamp.infrastructure.models import UserStampMixin, userstamp_column
from userstamp.infrastructure.registry import (
    StampPolicyRegistry,
    default_registry,
    policy_for,
    refresh_policy,
)
from userstamp.infrastructure.stamping import UserStamper, get_default_stamper

__version__ = "0.10.0"

__all__ = [
    "ColumnDefinition",
    "StampPolicy",
    "StampPolicyRegistry",
    "UserStampMixin",
    "UserStamper",
    "acting_user",
    "classify_columns",
    "context_user_id",
    "default_registry",
    "describe_columns",
    "get_default_stamper",
    "modified_columns",
    "policy_for",
    "refresh_policy",
    "session_user_id",
    "stamp_on_create",
    "stamp_on_update",
    "userstamp_column",
]
