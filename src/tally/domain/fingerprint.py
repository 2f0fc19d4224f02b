"""Duplicate detection policy.

Two transactions are duplicates when they carry the same observable content:
the same amount (ignoring trailing zeros), type, category and description
(ignoring surrounding whitespace and case). The fingerprint is the key the
stores index on to reject such records.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

SEPARATOR = "_"


def normalize_amount(amount: Decimal) -> str:
    """Return canonical plain-decimal text for an amount.

    Examples:
        Decimal("100.00") -> "100"
        Decimal("12.50") -> "12.5"
        Decimal("1E+2") -> "100"
    """
    normalized = Decimal(amount).normalize()
    # normalize() turns 100 into 1E+2; format with "f" to keep plain notation
    return format(normalized, "f")


def normalize_description(description: Optional[str]) -> str:
    """Trim and lowercase a description; a missing description becomes ""."""
    if description is None:
        return ""
    return description.strip().lower()


def fingerprint(
    amount: Decimal,
    type: Enum,
    category: Enum,
    description: Optional[str],
) -> str:
    """Compute the duplicate-detection key for transaction content."""
    return SEPARATOR.join(
        (
            normalize_amount(amount),
            type.name,
            category.name,
            normalize_description(description),
        )
    )
