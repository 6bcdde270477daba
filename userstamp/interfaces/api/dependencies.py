"""FastAPI dependency utilities."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

from fastapi import Depends

from userstamp.infrastructure import database
from userstamp.infrastructure.database import StampingSession


def stamped_session(
    resolve_user_id: Callable[..., Any],
) -> Callable[..., Generator[StampingSession, None, None]]:
    """Build a dependency yielding a session that acts as the request's user.

    ``resolve_user_id`` is the host's own dependency returning the id of the
    authenticated user; it is resolved by FastAPI once per request.
    """

    def dependency(
        current_user_id: Any = Depends(resolve_user_id),
    ) -> Generator[StampingSession, None, None]:
        db = database.SessionLocal(current_user_id=current_user_id)
        try:
            yield db
        finally:
            db.close()

    return dependency


__all__ = ["stamped_session"]
