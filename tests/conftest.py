"""Shared pytest fixtures for tally tests."""

import tempfile
import os
import threading
from datetime import datetime, timedelta, UTC
from decimal import Decimal
import pytest

from tally.database.factories import create_sqlite_database
from tally.database.memory import InMemoryDatabase
from tally.database.sqlalchemy_db import SQLAlchemyDatabase
from tally.domain.entities import TransactionCategory, TransactionDraft, TransactionType
from tally.domain.transaction import TransactionService


class StepClock:
    """Clock that advances by a fixed step on every call."""

    def __init__(self, start=datetime(2024, 1, 15, 12, 0, tzinfo=UTC), step=timedelta(seconds=1)):
        self.current = start
        self.step = step
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            value = self.current
            self.current += self.step
            return value


def make_draft(amount="100.00", type=TransactionType.DEPOSIT, category=TransactionCategory.SALARY,
               description="Monthly salary"):
    """Build a TransactionDraft with sensible defaults."""
    return TransactionDraft(
        amount=Decimal(amount),
        type=type,
        category=category,
        description=description,
    )


@pytest.fixture
def draft():
    """Return the draft factory."""
    return make_draft


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an in-memory database with a stepping clock."""
    return InMemoryDatabase(clock=StepClock())


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    """Yield each Database implementation with a stepping clock."""
    if request.param == "memory":
        db = InMemoryDatabase(clock=StepClock())
    else:
        db = SQLAlchemyDatabase(
            f"sqlite:///{tmp_path / 'tally.db'}",
            clock=StepClock(),
            connect_args={"timeout": 30, "check_same_thread": False},
        )
    db.connect()
    db.initialize_schema()
    yield db
    db.disconnect()


@pytest.fixture
def transaction_service(memory_db):
    """Create a TransactionService over an in-memory database."""
    return TransactionService(memory_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
