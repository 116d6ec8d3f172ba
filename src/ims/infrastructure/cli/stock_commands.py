"""CLI commands for stock transactions."""

from __future__ import annotations

import click

from ims.application.list_transactions import ListTransactionsHandler
from ims.application.post_stock_transaction import PostStockTransactionHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import ledger_engine


@click.command("post")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--type", "movement_type", required=True,
              type=click.Choice(["add", "subtract"]), help="Receipt or withdrawal.")
@click.option("--quantity", required=True, type=int, help="Units moved.")
@click.option("--notes", default=None, help="Reason for the movement.")
def stock_post(product_id: str, movement_type: str, quantity: int, notes: str | None) -> None:
    """Post a stock receipt or withdrawal."""
    try:
        handler = PostStockTransactionHandler(ledger_engine())
        result = handler.handle(product_id, movement_type, quantity, notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    txn = result.transaction
    click.echo(
        f"Transaction {txn.id} recorded: {txn.type} {txn.quantity} x {txn.product_name} "
        f"(now {result.product.quantity} on hand)"
    )
    if result.warning:
        click.echo(f"WARNING: {result.warning}")


@click.command("history")
@click.option("--product", "product_id", default=None, help="Only this product.")
def stock_history(product_id: str | None) -> None:
    """Show the stock journal, oldest first."""
    try:
        entries = ListTransactionsHandler(ledger_engine()).handle(product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No stock transactions found.")
        return

    click.echo(f"{'When':<17} {'Product':<20} {'Type':<9} {'Qty':>5}  Notes")
    click.echo("-" * 70)
    for e in entries:
        click.echo(
            f"{e.created_at.strftime('%Y-%m-%d %H:%M'):<17} {e.product_name:<20} "
            f"{e.type:<9} {e.quantity:>5}  {e.notes or ''}"
        )
