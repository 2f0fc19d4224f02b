"""Abstract record store interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from tally.domain.entities import Transaction, TransactionDraft
from tally.domain.errors import NotFoundError


class Database(ABC):
    """Abstract record store for tally.

    Implementations own the primary set of transactions and the fingerprint
    index over it, and must keep both consistent under concurrent callers:
    every mutation is applied to both structures in one atomic section.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def create_transaction(self, draft: TransactionDraft) -> Transaction:
        """Store a new transaction with a fresh identifier and timestamp.

        Raises:
            DuplicateError: If another live transaction has the same fingerprint
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def find_by_fingerprint(self, fingerprint: str) -> Optional[Transaction]:
        """Get the live transaction owning a fingerprint, if any."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: str, draft: TransactionDraft) -> Transaction:
        """Replace all caller-controlled fields of a transaction.

        The identifier and original timestamp are preserved.

        Raises:
            NotFoundError: If the transaction doesn't exist
            DuplicateError: If a different transaction owns the new fingerprint
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> bool:
        """Delete a transaction and release its fingerprint.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        pass

    @abstractmethod
    def list_transactions(self, offset: int, limit: int) -> list[Transaction]:
        """List transactions, most recent first.

        Args:
            offset: Number of transactions to skip
            limit: Maximum number of transactions to return

        An offset past the end returns an empty list.
        """
        pass

    @abstractmethod
    def count_transactions(self) -> int:
        """Count live transactions."""
        pass

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every transaction."""
        pass

    def list_page(self, offset: int, limit: int) -> tuple[list[Transaction], int]:
        """List a window of transactions together with the total count.

        Implementations override this to take both from the same snapshot.
        """
        return self.list_transactions(offset, limit), self.count_transactions()

    def require_transaction(self, transaction_id: str) -> Transaction:
        """Get transaction by ID or raise NotFoundError."""
        transaction = self.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_id)
        return transaction
