"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: enums are stored by name and
timestamps come back from SQLite without tzinfo, so both are restored here.
"""

from datetime import datetime, UTC

from tally.domain import entities as domain
from tally.database.models import Transaction as ORMTransaction


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        amount=orm_transaction.amount,
        type=domain.TransactionType[orm_transaction.type],
        category=domain.TransactionCategory[orm_transaction.category],
        description=orm_transaction.description,
        timestamp=_as_utc(orm_transaction.timestamp),
    )


def apply_draft(orm_transaction: ORMTransaction, draft: domain.TransactionDraft) -> None:
    """Copy caller-controlled fields of a draft onto an ORM row."""
    orm_transaction.amount = draft.amount
    orm_transaction.type = draft.type.name
    orm_transaction.category = draft.category.name
    orm_transaction.description = draft.description
    orm_transaction.fingerprint = draft.fingerprint
