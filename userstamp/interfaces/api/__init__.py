"""FastAPI integration."""

from .dependencies import stamped_session

__all__ = ["stamped_session"]
