"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from tally.database.base import Database
from tally.database.memory import InMemoryDatabase
from tally.database.sqlalchemy_db import SQLAlchemyDatabase

BACKENDS = ("sqlite", "memory")


def default_database_path() -> str:
    """Return ~/.tally/tally.db, creating the directory if needed."""
    home = Path.home()
    db_dir = home / ".tally"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "tally.db")


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks TALLY_DB_PATH
            environment variable, then defaults to ~/.tally/tally.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("TALLY_DB_PATH")

    if database_path is None:
        database_path = default_database_path()

    database_url = f"sqlite:///{database_path}"
    # Concurrent writers wait on SQLite's file lock instead of failing at once
    return SQLAlchemyDatabase(database_url, connect_args={"timeout": 30, "check_same_thread": False})


def create_memory_database() -> InMemoryDatabase:
    """Create a process-local in-memory database instance."""
    return InMemoryDatabase()


def create_database(backend: str = "sqlite", database_path: Optional[str] = None) -> Database:
    """Create a database for the named backend.

    Args:
        backend: One of "sqlite" or "memory"
        database_path: SQLite file path; ignored for the memory backend

    Raises:
        ValueError: If the backend is unknown
    """
    if backend == "sqlite":
        return create_sqlite_database(database_path=database_path)
    if backend == "memory":
        return create_memory_database()
    raise ValueError(f"Unknown database backend '{backend}'. Expected one of: {', '.join(BACKENDS)}")
