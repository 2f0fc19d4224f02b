"""Rendering of transactions and pages for CLI output."""

import json
from typing import Any

import click

from tally.domain.entities import Page, Transaction


def transaction_to_dict(transaction: Transaction) -> dict[str, Any]:
    """Return the external representation of a transaction."""
    return {
        "id": transaction.id,
        "amount": str(transaction.amount),
        "type": transaction.type.name,
        "typeDisplayName": transaction.type.display_name,
        "category": transaction.category.name,
        "categoryDisplayName": transaction.category.display_name,
        "description": transaction.description,
        "timestamp": transaction.timestamp.isoformat(),
    }


def page_to_dict(page: Page[Transaction]) -> dict[str, Any]:
    """Return the external representation of a page of transactions."""
    return {
        "content": [transaction_to_dict(t) for t in page.items],
        "page": page.page,
        "size": page.size,
        "totalElements": page.total_elements,
        "totalPages": page.total_pages,
        "first": page.is_first,
        "last": page.is_last,
    }


def echo_json(data: dict[str, Any]) -> None:
    click.echo(json.dumps(data, indent=2))


def echo_transaction(transaction: Transaction) -> None:
    """Print a transaction as labelled lines."""
    click.echo(f"  ID: {transaction.id}")
    click.echo(f"  Amount: {transaction.amount:,.2f}")
    click.echo(f"  Type: {transaction.type.display_name}")
    click.echo(f"  Category: {transaction.category.display_name}")
    if transaction.description:
        click.echo(f"  Description: {transaction.description}")
    click.echo(f"  Timestamp: {transaction.timestamp:%Y-%m-%d %H:%M:%S}")


def echo_page(page: Page[Transaction]) -> None:
    """Print a page of transactions as a table."""
    if not page.items:
        click.echo("No transactions found.")
    else:
        click.echo(f"{'ID':<36} {'Timestamp':<19} {'Type':<10} {'Category':<15} {'Amount':>12}  Description")
        click.echo("-" * 110)
        for t in page.items:
            click.echo(
                f"{t.id:<36} {t.timestamp:%Y-%m-%d %H:%M:%S} {t.type.display_name:<10} "
                f"{t.category.display_name:<15} {t.amount:>12,.2f}  {t.description or ''}"
            )
    click.echo(
        f"Page {page.page + 1} of {max(page.total_pages, 1)} "
        f"({page.total_elements} transaction{'s' if page.total_elements != 1 else ''})"
    )
