"""Domain model entities for tally.

These are pure data classes representing business concepts, independent of
the storage backend. Both the in-memory store and the SQLAlchemy store hand
out the same frozen entities, so callers never see a partially updated record.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, Optional, Sequence, TypeVar

from tally.domain.fingerprint import fingerprint

T = TypeVar("T")


class TransactionType(Enum):
    """Direction of money movement."""

    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    TRANSFER = "Transfer"

    @property
    def display_name(self) -> str:
        return self.value


class TransactionCategory(Enum):
    """Purpose of a transaction."""

    SALARY = "Salary"
    SHOPPING = "Shopping"
    FOOD = "Food & Dining"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    HEALTHCARE = "Healthcare"
    TRANSPORTATION = "Transportation"
    OTHER = "Other"

    @property
    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class TransactionDraft:
    """Candidate content for a create or update.

    Holds every field a caller controls; the store adds the identifier and
    timestamp.
    """

    amount: Decimal
    type: TransactionType
    category: TransactionCategory
    description: Optional[str] = None

    @property
    def fingerprint(self) -> str:
        return fingerprint(self.amount, self.type, self.category, self.description)


@dataclass(frozen=True)
class Transaction:
    """Stored transaction domain entity."""

    id: str
    amount: Decimal
    type: TransactionType
    category: TransactionCategory
    description: Optional[str]
    timestamp: datetime

    @property
    def fingerprint(self) -> str:
        return fingerprint(self.amount, self.type, self.category, self.description)

    def to_draft(self) -> TransactionDraft:
        """Return the caller-controlled content of this transaction."""
        return TransactionDraft(
            amount=self.amount,
            type=self.type,
            category=self.category,
            description=self.description,
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    """One window of an ordered listing plus pagination metadata."""

    items: tuple[T, ...]
    page: int
    size: int
    total_elements: int
    total_pages: int
    is_first: bool
    is_last: bool

    @classmethod
    def of(cls, items: Sequence[T], page: int, size: int, total_elements: int) -> "Page[T]":
        """Build a page, deriving total_pages, is_first and is_last."""
        total_pages = math.ceil(total_elements / size) if size > 0 else 0
        return cls(
            items=tuple(items),
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
            is_first=page == 0,
            is_last=page >= total_pages - 1,
        )
