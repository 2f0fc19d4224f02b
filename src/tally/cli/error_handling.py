"""CLI error handling helpers."""

import logging

import click

from tally.domain.errors import DomainError, DuplicateError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Checked in order; the first matching variant decides the response
ERROR_RESPONSES: tuple[tuple[type[DomainError], str, int], ...] = (
    (ValidationError, "Validation failed", 2),
    (NotFoundError, "Not found", 3),
    (DuplicateError, "Conflict", 4),
    (DomainError, "Error", 1),
)


def error_response(error: DomainError) -> tuple[str, int]:
    """Return the label and exit code for a domain error."""
    for error_type, label, exit_code in ERROR_RESPONSES:
        if isinstance(error, error_type):
            return label, exit_code
    return "Error", 1


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error and exit with its exit code."""
    label, exit_code = error_response(error)
    if isinstance(error, DuplicateError):
        logger.warning("Duplicate fingerprint: %s", error.fingerprint)
    click.echo(f"{label}: {error}", err=True)
    ctx.exit(exit_code)
