"""Input validation for transaction content.

Runs at the boundary, before anything reaches the record store.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, TypeVar, Union

from tally.domain.entities import TransactionCategory, TransactionDraft, TransactionType
from tally.domain.errors import ValidationError
from tally.utils.amount_parser import parse_amount

E = TypeVar("E", bound=Enum)

MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999999999999.99")
MAX_FRACTION_DIGITS = 2
MAX_DESCRIPTION_LENGTH = 500


def validate_amount(amount: Union[str, int, Decimal]) -> Decimal:
    """Parse and check an amount.

    Amounts range from 0.01 to 99999999999999999.99 (17 integer digits).

    Trailing zeros don't count against the fraction digits, so "10.500" is
    accepted while "10.505" is not.

    Raises:
        ValidationError: If the amount is malformed, out of range or too precise
    """
    if isinstance(amount, float):
        raise ValidationError("Amount must be given as a string or Decimal, not float")
    try:
        value = parse_amount(amount) if isinstance(amount, str) else Decimal(amount)
    except ValueError as e:
        raise ValidationError(str(e))

    if value < MIN_AMOUNT:
        raise ValidationError("Transaction amount must be greater than 0")
    if value > MAX_AMOUNT:
        raise ValidationError(f"Transaction amount cannot exceed {MAX_AMOUNT}")
    exponent = value.normalize().as_tuple().exponent
    if isinstance(exponent, int) and -exponent > MAX_FRACTION_DIGITS:
        raise ValidationError(f"Transaction amount allows at most {MAX_FRACTION_DIGITS} decimal places")
    return value


def parse_choice(enum_cls: type[E], value: Union[str, E], label: str) -> E:
    """Resolve an enum member by name (case-insensitive) or display name.

    Raises:
        ValidationError: If no member matches
    """
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    for member in enum_cls:
        if member.name == text.upper() or member.value.lower() == text.lower():
            return member
    choices = ", ".join(member.name for member in enum_cls)
    raise ValidationError(f"Invalid transaction {label} '{value}'. Expected one of: {choices}")


def validate_description(description: Optional[str]) -> Optional[str]:
    """Check description length.

    Raises:
        ValidationError: If the description is longer than 500 characters
    """
    if description is not None and len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters")
    return description


def build_draft(
    amount: Union[str, int, Decimal],
    type: Union[str, TransactionType],
    category: Union[str, TransactionCategory],
    description: Optional[str] = None,
) -> TransactionDraft:
    """Validate raw input and build a TransactionDraft.

    Raises:
        ValidationError: If any field is invalid
    """
    return TransactionDraft(
        amount=validate_amount(amount),
        type=parse_choice(TransactionType, type, "type"),
        category=parse_choice(TransactionCategory, category, "category"),
        description=validate_description(description),
    )
