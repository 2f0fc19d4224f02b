"""Main CLI entry point."""

import click

from tally.config import Settings
from tally.database.factories import BACKENDS, create_database
from tally.domain.errors import DomainError
from tally.domain.transaction import TransactionService
from tally.logging_config import configure_logging
from tally.cli.error_handling import handle_domain_error

# Import and register all commands at module level
from tally.cli.commands import transaction


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TALLY_DB_PATH environment variable)",
    envvar="TALLY_DB_PATH",
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default="sqlite",
    show_default=True,
    envvar="TALLY_BACKEND",
    help="Storage backend; 'memory' keeps records only for the current process",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    envvar="TALLY_LOG_LEVEL",
    help="Logging level (DEBUG, INFO, WARNING, ERROR)",
)
@click.pass_context
def cli(ctx, db_path: str | None, backend: str, log_level: str):
    """Tally - transaction record management.

    Create, view, list, update and delete financial transactions. Records
    with the same amount, type, category and description are rejected as
    duplicates.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            configure_logging(log_level)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--log-level")
        if "service" in ctx.obj:
            # Caller supplied a ready service (embedding, tests)
            return
        try:
            settings = Settings.from_env()
        except DomainError as e:
            handle_domain_error(ctx, e)

        db = create_database(backend=backend, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["service"] = TransactionService(db, settings=settings)


# Register all commands
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
