"""Tests for concurrent access to the store and service."""

import pytest
from concurrent.futures import ThreadPoolExecutor

from tally.domain.errors import DuplicateError, NotFoundError
from tally.domain.transaction import TransactionService

WORKERS = 8


def _run(func, args):
    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        futures = [pool.submit(func, arg) for arg in args]
        return [f.exception() or f.result() for f in futures]


class TestConcurrentCreates:
    """Tests for parallel creates."""

    def test_distinct_creates_all_succeed(self, store, draft):
        """Test N distinct creates yield N distinct IDs and no lost index entries."""
        n = 40
        results = _run(lambda i: store.create_transaction(draft(amount=f"{i}.00")), range(1, n + 1))

        ids = {t.id for t in results}
        assert len(ids) == n
        assert store.count_transactions() == n
        for transaction in results:
            assert store.find_by_fingerprint(transaction.fingerprint).id == transaction.id

    def test_identical_creates_have_one_winner(self, store, draft):
        """Test racing creates of the same content produce exactly one record."""
        results = _run(lambda _: store.create_transaction(draft()), range(WORKERS * 2))

        winners = [r for r in results if not isinstance(r, Exception)]
        losers = [r for r in results if isinstance(r, Exception)]
        assert len(winners) == 1
        assert all(isinstance(e, DuplicateError) for e in losers)
        assert store.count_transactions() == 1


class TestConcurrentService:
    """Tests for the service under parallel callers."""

    def test_parallel_creates_through_service(self, memory_db, draft):
        """Test the service keeps count and caches consistent."""
        service = TransactionService(memory_db)
        n = 50
        created = _run(lambda i: service.create_transaction(draft(amount=f"{i}.50")), range(n))

        assert service.count_transactions() == n
        assert service.list_transactions(size=100).total_elements == n
        for transaction in created:
            assert service.get_transaction(transaction.id) == transaction

    def test_racing_deletes_have_one_winner(self, memory_db, draft):
        """Test only one of several deletes of the same ID succeeds."""
        service = TransactionService(memory_db)
        transaction = service.create_transaction(draft())

        results = _run(lambda _: service.delete_transaction(transaction.id), range(WORKERS))

        assert results.count(True) == 1
        assert all(isinstance(r, NotFoundError) for r in results if r is not True)
        with pytest.raises(NotFoundError):
            service.get_transaction(transaction.id)

    def test_cached_value_matches_store_after_racing_updates(self, memory_db, draft):
        """Test the cached record equals the stored one after concurrent updates."""
        service = TransactionService(memory_db)
        transaction = service.create_transaction(draft())

        _run(
            lambda i: service.update_transaction(transaction.id, draft(amount=f"{i}.00")),
            range(1, 30),
        )

        assert service.get_transaction(transaction.id) == memory_db.get_transaction(transaction.id)
