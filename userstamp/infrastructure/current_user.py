"""Accessors resolving the acting user id for a record instance.

An accessor is any callable taking the instance being saved and returning the
id to store. Hosts pass their own to ``UserStamper`` when neither of the ones
below fits their session mechanism.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any

from sqlalchemy.orm import object_session

CURRENT_USER_ID_KEY = "current_user_id"

UserIdAccessor = Callable[[Any], Any]

_current_user_id: ContextVar[Any] = ContextVar("current_user_id", default=None)
_MISSING = object()


def session_user_id(instance: Any) -> Any:
    """Return the ``current_user_id`` of the session owning ``instance``.

    Sessions exposing a ``current_user_id`` attribute are asked for it; plain
    sessions are read through their ``info`` dictionary.
    """

    session = object_session(instance)
    if session is None:
        return None
    user_id = getattr(session, CURRENT_USER_ID_KEY, _MISSING)
    if user_id is _MISSING:
        return session.info.get(CURRENT_USER_ID_KEY)
    return user_id


def context_user_id(instance: Any) -> Any:
    """Return the user id bound to the running thread or asyncio task."""

    return _current_user_id.get()


def get_current_user_id() -> Any:
    return _current_user_id.get()


def set_current_user_id(user_id: Any) -> Token:
    return _current_user_id.set(user_id)


def reset_current_user_id(token: Token) -> None:
    _current_user_id.reset(token)


@contextmanager
def acting_user(user_id: Any) -> Iterator[Any]:
    """Bind ``user_id`` as the acting user for the enclosed block."""

    token = _current_user_id.set(user_id)
    try:
        yield user_id
    finally:
        _current_user_id.reset(token)


_ACCESSORS: dict[str, UserIdAccessor] = {
    "session": session_user_id,
    "context": context_user_id,
}


def resolve_user_id_accessor(source: str) -> UserIdAccessor:
    """Return the accessor registered under ``source``."""

    try:
        return _ACCESSORS[source]
    except KeyError:
        msg = f"Unknown current user source '{source}'"
        raise ValueError(msg) from None


__all__ = [
    "CURRENT_USER_ID_KEY",
    "UserIdAccessor",
    "acting_user",
    "context_user_id",
    "get_current_user_id",
    "reset_current_user_id",
    "resolve_user_id_accessor",
    "session_user_id",
    "set_current_user_id",
]
