"""Persistence helpers saving records through the user stamper."""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy.orm import Session

from userstamp.infrastructure.stamping import UserStamper, get_default_stamper

ModelT = TypeVar("ModelT")


class RecordRepository:
    """Provide CRUD operations that stamp records before committing them."""

    def __init__(self, session: Session, stamper: UserStamper | None = None) -> None:
        self.session = session
        self.stamper = stamper or get_default_stamper()
        self._insert = self.stamper.wrap_insert(self._commit)
        self._update = self.stamper.wrap_update(self._commit)

    def get(self, model_cls: type[ModelT], record_id: Any) -> ModelT | None:
        return self.session.get(model_cls, record_id)

    def create(self, model: ModelT) -> ModelT:
        self.session.add(model)
        return self._insert(model)

    def update(self, model: ModelT) -> ModelT:
        self.session.add(model)
        return self._update(model)

    def delete(self, model: Any) -> None:
        self.session.delete(model)
        self.session.commit()

    def _commit(self, model: ModelT) -> ModelT:
        self.session.commit()
        self.session.refresh(model)
        return model


__all__ = ["RecordRepository"]
