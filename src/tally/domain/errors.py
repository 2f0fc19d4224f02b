"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input rejected before it reaches the record store."""


class NotFoundError(DomainError):
    """No live transaction has the requested identifier."""

    def __init__(self, transaction_id: str, message: Optional[str] = None):
        super().__init__(message or transaction_not_found(transaction_id))
        self.transaction_id = transaction_id


class DuplicateError(DomainError):
    """Transaction content collides with another live transaction.

    Carries the computed fingerprint for diagnostics.
    """

    def __init__(self, fingerprint: str, message: Optional[str] = None):
        super().__init__(message or duplicate_transaction())
        self.fingerprint = fingerprint


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction not found with ID: {transaction_id}"


def duplicate_transaction() -> str:
    """Return message for content-duplicate transaction."""
    return (
        "Duplicate transaction detected: a transaction with the same amount, "
        "type, category and description already exists"
    )


def invalid_setting(name: str, value: str) -> str:
    """Return message for an environment setting that is not a positive integer."""
    return f"Setting {name} must be a positive integer, got '{value}'"
