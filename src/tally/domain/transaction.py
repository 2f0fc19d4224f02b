"""Transaction domain service."""

import logging
import threading
import zlib
from typing import Callable, Hashable, Optional, TypeVar

from tally.config import Settings
from tally.database.base import Database
from tally.domain.entities import Page, Transaction, TransactionDraft
from tally.domain.errors import DuplicateError
from tally.utils.cache import TTLCache

logger = logging.getLogger(__name__)

R = TypeVar("R")

LOCK_STRIPES = 64

PageKey = tuple[int, int]


class TransactionService:
    """Service for managing transactions.

    Sits in front of a Database and keeps two caches consistent with it:
    a record cache keyed by transaction ID and a page cache keyed by
    ``(page, size)``. Every successful create, update or delete clears the
    whole page cache.
    """

    def __init__(
        self,
        db: Database,
        settings: Optional[Settings] = None,
        record_cache: Optional[TTLCache[Transaction]] = None,
        page_cache: Optional[TTLCache[Page[Transaction]]] = None,
    ):
        """Initialize transaction service.

        Args:
            db: Database instance
            settings: Pagination and cache settings; defaults apply when None
            record_cache: Cache for single transactions, built from settings if None
            page_cache: Cache for listing pages, built from settings if None
        """
        self.db = db
        self.settings = settings or Settings()
        if record_cache is None:
            record_cache = TTLCache(
                maxsize=self.settings.record_cache_size, ttl=self.settings.record_cache_ttl
            )
        if page_cache is None:
            page_cache = TTLCache(maxsize=self.settings.page_cache_size, ttl=self.settings.page_cache_ttl)
        self.record_cache = record_cache
        self.page_cache = page_cache
        self._stripes = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def _lock_for(self, transaction_id: str) -> threading.Lock:
        # crc32 is stable across processes, unlike hash() on str
        return self._stripes[zlib.crc32(transaction_id.encode()) % LOCK_STRIPES]

    def _cache_call(self, operation: Callable[[], R], action: str, key: Hashable) -> Optional[R]:
        """Run a cache operation; a failing cache degrades to the store path."""
        try:
            return operation()
        except Exception:
            logger.warning("Cache %s failed for %r, falling back to store", action, key, exc_info=True)
            return None

    def _invalidate_pages(self) -> None:
        self._cache_call(self.page_cache.clear, "clear", "pages")

    def create_transaction(self, draft: TransactionDraft) -> Transaction:
        """Create a transaction.

        Args:
            draft: Transaction content

        Returns:
            The stored transaction with its generated ID and timestamp

        Raises:
            DuplicateError: If a transaction with the same content already exists
        """
        logger.debug("Creating transaction: %s", draft)
        try:
            transaction = self.db.create_transaction(draft)
        except DuplicateError as e:
            logger.warning("Rejected duplicate transaction %s", e.fingerprint)
            raise

        # Between the insert and this lock the record may have been updated
        # (newer version already cached) or deleted (must not be cached)
        with self._lock_for(transaction.id):
            current = self.db.get_transaction(transaction.id)
            if current is not None:
                self._cache_call(
                    lambda: self.record_cache.add(transaction.id, current), "add", transaction.id
                )
        self._invalidate_pages()
        logger.info("Created transaction with ID: %s", transaction.id)
        return transaction

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Get transaction by ID.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        logger.debug("Getting transaction by ID: %s", transaction_id)
        cached = self._cache_call(lambda: self.record_cache.get(transaction_id), "get", transaction_id)
        if cached is not None:
            return cached

        # Populate under the ID's lock so a concurrent update cannot be
        # overwritten by the value read here
        with self._lock_for(transaction_id):
            transaction = self.db.require_transaction(transaction_id)
            self._cache_call(
                lambda: self.record_cache.put(transaction_id, transaction), "put", transaction_id
            )
        return transaction

    def list_transactions(self, page: int = 0, size: int = 0) -> Page[Transaction]:
        """List transactions, most recent first.

        Args:
            page: Zero-based page number; negative values mean 0
            size: Page size; values <= 0 use the default, values above the
                maximum are clamped to it

        Returns:
            Page of transactions with pagination metadata
        """
        page = max(page, 0)
        if size <= 0:
            size = self.settings.default_page_size
        size = min(size, self.settings.max_page_size)
        key: PageKey = (page, size)
        logger.debug("Listing transactions - page: %s, size: %s", page, size)

        cached = self._cache_call(lambda: self.page_cache.get(key), "get", key)
        if cached is not None:
            return cached

        generation = self._cache_call(lambda: self.page_cache.generation, "generation", key)
        items, total = self.db.list_page(page * size, size)
        result = Page.of(items, page, size, total)
        if generation is not None:
            self._cache_call(lambda: self.page_cache.put(key, result, generation=generation), "put", key)
        return result

    def update_transaction(self, transaction_id: str, draft: TransactionDraft) -> Transaction:
        """Replace a transaction's content, keeping its ID and timestamp.

        Raises:
            NotFoundError: If the transaction doesn't exist
            DuplicateError: If another transaction already has this content
        """
        logger.debug("Updating transaction ID: %s with data: %s", transaction_id, draft)
        with self._lock_for(transaction_id):
            try:
                transaction = self.db.update_transaction(transaction_id, draft)
            except DuplicateError as e:
                logger.warning("Rejected duplicate update of %s: %s", transaction_id, e.fingerprint)
                raise
            self._cache_call(
                lambda: self.record_cache.put(transaction_id, transaction), "put", transaction_id
            )
        self._invalidate_pages()
        logger.info("Updated transaction with ID: %s", transaction_id)
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        logger.debug("Deleting transaction with ID: %s", transaction_id)
        with self._lock_for(transaction_id):
            self._cache_call(lambda: self.record_cache.evict(transaction_id), "evict", transaction_id)
            deleted = self.db.delete_transaction(transaction_id)
            self._cache_call(lambda: self.record_cache.evict(transaction_id), "evict", transaction_id)
        self._invalidate_pages()
        logger.info("Deleted transaction with ID: %s", transaction_id)
        return deleted

    def count_transactions(self) -> int:
        """Count live transactions."""
        return self.db.count_transactions()

    def clear_caches(self) -> None:
        """Drop every cached record and page."""
        self._cache_call(self.record_cache.clear, "clear", "records")
        self._invalidate_pages()
