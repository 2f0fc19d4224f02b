"""Runtime settings for tally.

Values come from ``TALLY_*`` environment variables. The database path,
backend and log level are CLI options with their own envvars.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from tally.domain.errors import ValidationError, invalid_setting


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(invalid_setting(name, raw))
    if value <= 0:
        raise ValidationError(invalid_setting(name, raw))
    return value


@dataclass(frozen=True)
class Settings:
    """Pagination and cache settings."""

    default_page_size: int = 10
    max_page_size: int = 100
    record_cache_size: int = 1000
    record_cache_ttl: int = 300
    page_cache_size: int = 100
    page_cache_ttl: int = 60

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            env: Mapping to read instead of ``os.environ``

        Raises:
            ValidationError: If a numeric setting is not a positive integer
        """
        if env is None:
            env = os.environ
        return cls(
            default_page_size=_int_setting(env, "TALLY_DEFAULT_PAGE_SIZE", 10),
            max_page_size=_int_setting(env, "TALLY_MAX_PAGE_SIZE", 100),
            record_cache_size=_int_setting(env, "TALLY_RECORD_CACHE_SIZE", 1000),
            record_cache_ttl=_int_setting(env, "TALLY_RECORD_CACHE_TTL", 300),
            page_cache_size=_int_setting(env, "TALLY_PAGE_CACHE_SIZE", 100),
            page_cache_ttl=_int_setting(env, "TALLY_PAGE_CACHE_TTL", 60),
        )
