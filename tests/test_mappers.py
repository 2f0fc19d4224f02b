"""Tests for database mappers."""

from datetime import datetime, UTC
from decimal import Decimal

from tally.database.models import Transaction as ORMTransaction
from tally.database.mappers import apply_draft, transaction_to_domain
from tally.domain.entities import Transaction, TransactionCategory, TransactionType


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        """Test converting ORM Transaction to domain Transaction."""
        orm_transaction = ORMTransaction(
            seq=1,
            id="b2c4",
            amount=Decimal("12.50"),
            type="WITHDRAWAL",
            category="FOOD",
            description="Lunch",
            timestamp=datetime(2024, 1, 15, 12, 30),
            fingerprint="12.5_WITHDRAWAL_FOOD_lunch",
        )
        domain_transaction = transaction_to_domain(orm_transaction)

        assert isinstance(domain_transaction, Transaction)
        assert domain_transaction.id == "b2c4"
        assert domain_transaction.amount == Decimal("12.50")
        assert domain_transaction.type == TransactionType.WITHDRAWAL
        assert domain_transaction.category == TransactionCategory.FOOD
        assert domain_transaction.description == "Lunch"
        # Naive timestamps from SQLite are read back as UTC
        assert domain_transaction.timestamp == datetime(2024, 1, 15, 12, 30, tzinfo=UTC)

    def test_apply_draft(self, draft):
        """Test copying a draft onto an ORM row stores enum names and fingerprint."""
        orm_transaction = ORMTransaction(id="b2c4")
        apply_draft(orm_transaction, draft(description=" Bonus "))

        assert orm_transaction.amount == Decimal("100.00")
        assert orm_transaction.type == "DEPOSIT"
        assert orm_transaction.category == "SALARY"
        assert orm_transaction.description == " Bonus "
        assert orm_transaction.fingerprint == "100_DEPOSIT_SALARY_bonus"
