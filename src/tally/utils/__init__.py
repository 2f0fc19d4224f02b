"""Utility functions for tally."""

from tally.utils.amount_parser import parse_amount
from tally.utils.cache import TTLCache

__all__ = ["parse_amount", "TTLCache"]
