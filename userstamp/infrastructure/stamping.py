"""Interceptor injecting the acting user id before records are inserted or updated."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from functools import lru_cache
from typing import Any, TypeVar

from sqlalchemy import event
from sqlalchemy.orm import Session

from userstamp.application.use_cases import stamp_on_create, stamp_on_update
from userstamp.config import get_settings
from .current_user import UserIdAccessor, resolve_user_id_accessor, session_user_id
from .mapping import modified_columns
from .registry import StampPolicyRegistry, default_registry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserStamper:
    """Stamp records with the acting user id, then hand them to the engine.

    The stamper works either as an explicit wrapper around insert/update
    callables (:meth:`wrap_insert`, :meth:`wrap_update`) or as a
    ``before_flush`` listener installed on a session (:meth:`install`).
    Both paths can be combined; a second pass finds nothing left to stamp.
    """

    def __init__(
        self,
        registry: StampPolicyRegistry | None = None,
        current_user_id: UserIdAccessor | None = None,
    ) -> None:
        self.registry = registry or default_registry
        self.current_user_id = current_user_id or session_user_id

    def stamp_insert(self, instance: Any) -> list[str]:
        """Fill the create-time columns of ``instance`` that hold no value."""

        user_id = self.current_user_id(instance)
        policy = self.registry.get(type(instance))
        stamped = stamp_on_create(instance, policy, user_id)
        if stamped:
            logger.debug(
                "Stamped %s on create of %s with user %r",
                stamped,
                type(instance).__name__,
                user_id,
            )
        return stamped

    def stamp_update(self, instance: Any) -> list[str]:
        """Overwrite the update-time columns of ``instance`` the caller left untouched."""

        user_id = self.current_user_id(instance)
        policy = self.registry.get(type(instance))
        if not policy.on_update:
            return []
        dirty = modified_columns(instance)
        stamped = stamp_on_update(instance, policy, user_id, dirty)
        if stamped:
            logger.debug(
                "Stamped %s on update of %s with user %r",
                stamped,
                type(instance).__name__,
                user_id,
            )
        return stamped

    def wrap_insert(self, operation: Callable[..., T]) -> Callable[..., T]:
        """Decorate an insert callable whose first argument is the record."""

        @functools.wraps(operation)
        def wrapper(instance: Any, *args: Any, **kwargs: Any) -> T:
            self.stamp_insert(instance)
            return operation(instance, *args, **kwargs)

        return wrapper

    def wrap_update(self, operation: Callable[..., T]) -> Callable[..., T]:
        """Decorate an update callable whose first argument is the record."""

        @functools.wraps(operation)
        def wrapper(instance: Any, *args: Any, **kwargs: Any) -> T:
            self.stamp_update(instance)
            return operation(instance, *args, **kwargs)

        return wrapper

    def before_flush(self, session: Session, flush_context: Any, instances: Any) -> None:
        """Stamp pending objects as inserts and modified objects as updates.

        Objects in ``session.dirty`` whose columns did not actually change
        are skipped; they would not be written by the flush.
        """

        for instance in list(session.new):
            self.stamp_insert(instance)
        for instance in list(session.dirty):
            if session.is_modified(instance, include_collections=False):
                self.stamp_update(instance)

    def install(self, target: Any) -> None:
        """Listen for flushes of a ``Session`` class, ``sessionmaker`` or session."""

        if not self.is_installed(target):
            event.listen(target, "before_flush", self.before_flush)

    def uninstall(self, target: Any) -> None:
        if self.is_installed(target):
            event.remove(target, "before_flush", self.before_flush)

    def is_installed(self, target: Any) -> bool:
        return event.contains(target, "before_flush", self.before_flush)


@lru_cache
def _stamper_for_source(source: str) -> UserStamper:
    return UserStamper(default_registry, resolve_user_id_accessor(source))


def get_default_stamper() -> UserStamper:
    """Return the stamper matching the current application settings.

    The user source is read on every call, so ``reset_settings_cache()``
    takes effect without reinstalling anything.
    """

    return _stamper_for_source(get_settings().current_user_source)


def default_before_flush(session: Session, flush_context: Any, instances: Any) -> None:
    """Flush listener delegating to whichever stamper is currently the default."""

    get_default_stamper().before_flush(session, flush_context, instances)


def install_default_stamper(target: Any) -> None:
    if not event.contains(target, "before_flush", default_before_flush):
        event.listen(target, "before_flush", default_before_flush)


__all__ = [
    "UserStamper",
    "default_before_flush",
    "get_default_stamper",
    "install_default_stamper",
]
