"""In-memory database implementation."""

import itertools
import logging
import threading
import uuid
from datetime import datetime, UTC
from typing import Callable, Optional

from tally.database.base import Database
from tally.domain.entities import Transaction, TransactionDraft
from tally.domain.errors import DuplicateError, NotFoundError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class InMemoryDatabase(Database):
    """Process-local implementation of Database interface.

    The primary set, the fingerprint index and the insertion sequence are one
    logical resource guarded by a single lock, so a reader never observes a
    mutation applied to one structure and not the other.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """Initialize in-memory database.

        Args:
            clock: Callable returning the creation timestamp for new
                transactions. Defaults to the current UTC time.
        """
        self.clock = clock or _utc_now
        self._lock = threading.RLock()
        self._transactions: dict[str, Transaction] = {}
        self._sequence: dict[str, int] = {}
        self._fingerprints: dict[str, str] = {}
        self._counter = itertools.count()

    def connect(self) -> None:
        """Connect to the database."""
        # Nothing to connect to
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    def _check_fingerprint(self, fingerprint: str, transaction_id: Optional[str] = None) -> None:
        owner = self._fingerprints.get(fingerprint)
        if owner is not None and owner != transaction_id:
            raise DuplicateError(fingerprint)

    def create_transaction(self, draft: TransactionDraft) -> Transaction:
        """Store a new transaction. Returns the stored entity."""
        fingerprint = draft.fingerprint
        with self._lock:
            self._check_fingerprint(fingerprint)
            transaction = Transaction(
                id=str(uuid.uuid4()),
                amount=draft.amount,
                type=draft.type,
                category=draft.category,
                description=draft.description,
                timestamp=self.clock(),
            )
            self._transactions[transaction.id] = transaction
            self._sequence[transaction.id] = next(self._counter)
            self._fingerprints[fingerprint] = transaction.id
        logger.debug("Inserted transaction %s", transaction.id)
        return transaction

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        with self._lock:
            return self._transactions.get(transaction_id)

    def find_by_fingerprint(self, fingerprint: str) -> Optional[Transaction]:
        """Get the live transaction owning a fingerprint."""
        with self._lock:
            transaction_id = self._fingerprints.get(fingerprint)
            if transaction_id is None:
                return None
            return self._transactions[transaction_id]

    def update_transaction(self, transaction_id: str, draft: TransactionDraft) -> Transaction:
        """Replace transaction fields, keeping ID and timestamp."""
        fingerprint = draft.fingerprint
        with self._lock:
            existing = self._transactions.get(transaction_id)
            if existing is None:
                raise NotFoundError(transaction_id)
            self._check_fingerprint(fingerprint, transaction_id)

            updated = Transaction(
                id=transaction_id,
                amount=draft.amount,
                type=draft.type,
                category=draft.category,
                description=draft.description,
                timestamp=existing.timestamp,
            )
            del self._fingerprints[existing.fingerprint]
            self._fingerprints[fingerprint] = transaction_id
            self._transactions[transaction_id] = updated
        return updated

    def delete_transaction(self, transaction_id: str) -> bool:
        """Delete a transaction and its fingerprint entry."""
        with self._lock:
            existing = self._transactions.pop(transaction_id, None)
            if existing is None:
                raise NotFoundError(transaction_id)
            del self._sequence[transaction_id]
            del self._fingerprints[existing.fingerprint]
        return True

    def _ordered(self) -> list[Transaction]:
        return sorted(
            self._transactions.values(),
            key=lambda t: (t.timestamp, self._sequence[t.id]),
            reverse=True,
        )

    def list_transactions(self, offset: int, limit: int) -> list[Transaction]:
        """List transactions, most recent first."""
        with self._lock:
            return self._ordered()[offset : offset + limit]

    def count_transactions(self) -> int:
        """Count live transactions."""
        with self._lock:
            return len(self._transactions)

    def list_page(self, offset: int, limit: int) -> tuple[list[Transaction], int]:
        """List a window and the total count from one snapshot."""
        with self._lock:
            return self._ordered()[offset : offset + limit], len(self._transactions)

    def delete_all(self) -> None:
        """Remove every transaction."""
        with self._lock:
            self._transactions.clear()
            self._sequence.clear()
            self._fingerprints.clear()
