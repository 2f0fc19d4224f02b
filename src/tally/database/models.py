"""SQLAlchemy models for tally database."""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


class DecimalText(TypeDecorator):
    """Decimal stored as its exact text.

    SQLite keeps NUMERIC columns as floating point, which would round the
    amount away from the value the fingerprint was computed from.
    """

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect) -> Optional[str]:
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value: Optional[str], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(value)


class Transaction(Base):
    """Transaction model.

    ``seq`` preserves insertion order for listing ties; ``fingerprint`` is the
    duplicate-detection index and is unique across live rows.
    """

    __tablename__ = "transactions"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False)
    amount = Column(DecimalText, nullable=False)
    type = Column(String(20), nullable=False)
    category = Column(String(20), nullable=False)
    description = Column(String(500), nullable=True)
    timestamp = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False, index=True)
    fingerprint = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("fingerprint", name="uq_transaction_fingerprint"),)


def create_session_factory(database_url: str, **engine_kwargs) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False, **engine_kwargs)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
