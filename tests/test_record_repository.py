"""Tests for the explicit insert/update wrappers and the record repository."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from userstamp.infrastructure import database
from userstamp.infrastructure.repositories import RecordRepository
from userstamp.infrastructure.stamping import UserStamper

from stamped_models import Document, Ticket


class _Clock:
    """Accessor returning the user ids it is given, in order."""

    def __init__(self, *user_ids):
        self.user_ids = list(user_ids)
        self.calls = 0

    def __call__(self, instance):
        self.calls += 1
        return self.user_ids.pop(0)


@pytest.fixture()
def plain_session(database_tables):
    session = Session(bind=database.engine)
    try:
        yield session
    finally:
        session.close()


def test_repository_stamps_create_and_update(plain_session):
    repository = RecordRepository(plain_session, UserStamper(current_user_id=_Clock(11, 12)))

    document = repository.create(Document(name="draft"))
    assert (document.u_created, document.u_updated) == (11, 11)

    document.name = "final"
    document = repository.update(document)

    assert document.u_created == 11
    assert document.u_updated == 12
    assert repository.get(Document, document.id).name == "final"


def test_explicit_update_call_stamps_even_without_changes(plain_session):
    repository = RecordRepository(plain_session, UserStamper(current_user_id=_Clock(1, 2)))
    document = repository.create(Document())

    repository.update(document)

    assert document.u_updated == 2


def test_engine_errors_propagate_unchanged(plain_session):
    repository = RecordRepository(plain_session, UserStamper(current_user_id=lambda _: 3))

    with pytest.raises(IntegrityError):
        repository.create(Ticket())
    plain_session.rollback()


def test_repository_delete(plain_session):
    repository = RecordRepository(plain_session, UserStamper(current_user_id=lambda _: 3))
    document = repository.create(Document())
    document_id = document.id

    repository.delete(document)

    assert repository.get(Document, document_id) is None


def test_wrapper_passes_arguments_and_result_through():
    calls = []
    stamper = UserStamper(current_user_id=lambda _: 1)

    @stamper.wrap_insert
    def insert(instance, *args, **kwargs):
        """Insert a record."""
        calls.append((instance, args, kwargs))
        return "inserted"

    record = object()
    assert insert(record, "a", flag=True) == "inserted"
    assert calls == [(record, ("a",), {"flag": True})]
    assert insert.__doc__ == "Insert a record."


def test_accessor_errors_abort_before_the_operation():
    calls = []

    def failing_accessor(instance):
        raise RuntimeError("no user in session")

    stamper = UserStamper(current_user_id=failing_accessor)
    update = stamper.wrap_update(lambda instance: calls.append(instance))

    with pytest.raises(RuntimeError, match="no user in session"):
        update(object())
    assert calls == []


def test_unregistered_types_pass_through_untouched():
    class Plain:
        created_by = None

    record = Plain()
    stamper = UserStamper(current_user_id=lambda _: 9)

    assert stamper.stamp_insert(record) == []
    assert stamper.stamp_update(record) == []
    assert record.created_by is None
