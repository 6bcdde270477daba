"""Shared fixtures for the user stamping tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for path in (ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from userstamp.infrastructure import database  # noqa: E402

import stamped_models  # noqa: E402,F401  # register the test tables


@pytest.fixture()
def database_tables():
    """Create a clean set of tables for the duration of a test."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield database.engine
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
