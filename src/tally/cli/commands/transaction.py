"""Transaction management commands."""

import click

from tally.domain.entities import TransactionCategory, TransactionType
from tally.domain.errors import DomainError
from tally.domain.transaction import TransactionService
from tally.cli.error_handling import handle_domain_error
from tally.cli.formatting import (
    echo_json,
    echo_page,
    echo_transaction,
    page_to_dict,
    transaction_to_dict,
)
from tally.utils.validation import build_draft

TYPE_HELP = f"Transaction type ({', '.join(t.name for t in TransactionType)})"
CATEGORY_HELP = f"Transaction category ({', '.join(c.name for c in TransactionCategory)})"


def content_options(func):
    """Attach the options shared by add and update."""
    func = click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")(func)
    func = click.option("--description", help="Transaction description (max 500 characters)")(func)
    func = click.option("--category", required=True, help=CATEGORY_HELP)(func)
    func = click.option("--type", "type_", required=True, help=TYPE_HELP)(func)
    func = click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")(func)
    return func


@click.command("add")
@content_options
@click.pass_context
def add_transaction(
    ctx,
    amount: str,
    type_: str,
    category: str,
    description: str | None,
    as_json: bool,
):
    """Add a transaction.

    Examples:
        tally add --amount 50.00 --type WITHDRAWAL --category FOOD --description "Groceries"
        tally add --amount 2500 --type deposit --category salary
    """
    service: TransactionService = ctx.obj["service"]
    try:
        draft = build_draft(amount, type_, category, description)
        txn = service.create_transaction(draft)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(transaction_to_dict(txn))
        return
    click.echo(f"Created transaction {txn.id}")
    echo_transaction(txn)


@click.command("show")
@click.argument("transaction_id")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def show_transaction(ctx, transaction_id: str, as_json: bool):
    """Show a single transaction."""
    service: TransactionService = ctx.obj["service"]
    try:
        txn = service.get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(transaction_to_dict(txn))
        return
    click.echo(f"Transaction {txn.id}")
    echo_transaction(txn)


@click.command("list")
@click.option("--page", type=int, default=0, show_default=True, help="Page number, starting at 0")
@click.option("--size", type=int, default=0, help="Page size (default and maximum come from settings)")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def list_transactions(ctx, page: int, size: int, as_json: bool):
    """List transactions, most recent first."""
    service: TransactionService = ctx.obj["service"]
    result = service.list_transactions(page=page, size=size)
    if as_json:
        echo_json(page_to_dict(result))
        return
    echo_page(result)


@click.command("update")
@click.argument("transaction_id")
@content_options
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    amount: str,
    type_: str,
    category: str,
    description: str | None,
    as_json: bool,
) -> None:
    """Replace the content of a transaction.

    All fields are replaced; the ID and original timestamp are kept.

    Examples:
        tally update 3f0c... --amount 75.00 --type WITHDRAWAL --category FOOD
    """
    service: TransactionService = ctx.obj["service"]
    try:
        draft = build_draft(amount, type_, category, description)
        txn = service.update_transaction(transaction_id, draft)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(transaction_to_dict(txn))
        return
    click.echo(f"Updated transaction {txn.id}")
    echo_transaction(txn)


@click.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str) -> None:
    """Delete a transaction."""
    service: TransactionService = ctx.obj["service"]
    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@click.command("count")
@click.pass_context
def count_transactions(ctx) -> None:
    """Print the number of stored transactions."""
    service: TransactionService = ctx.obj["service"]
    click.echo(str(service.count_transactions()))


@click.command("types")
def list_types() -> None:
    """List transaction types and categories."""
    click.echo("Types:")
    for t in TransactionType:
        click.echo(f"  {t.name:<15} {t.display_name}")
    click.echo("Categories:")
    for c in TransactionCategory:
        click.echo(f"  {c.name:<15} {c.display_name}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(add_transaction)
    cli.add_command(show_transaction)
    cli.add_command(list_transactions)
    cli.add_command(update_transaction)
    cli.add_command(delete_transaction)
    cli.add_command(count_transactions)
    cli.add_command(list_types)
