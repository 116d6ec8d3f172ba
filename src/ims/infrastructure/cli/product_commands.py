"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from ims.application.add_product import AddProductHandler
from ims.application.delete_product import DeleteProductHandler
from ims.application.list_products import ListProductsHandler
from ims.application.show_product import ShowProductHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.product import ProductChanges
from ims.infrastructure.bootstrap import ledger_engine


def _display_product(dto) -> None:
    click.echo(f"Product {dto.id}  '{dto.name}'")
    click.echo(f"Category:    {dto.category}")
    if dto.description:
        click.echo(f"Description: {dto.description}")
    click.echo(f"Price:       ${dto.price:.2f}")
    click.echo(f"On hand:     {dto.quantity}  (minimum {dto.min_stock_level})")
    if dto.low_stock:
        click.echo("Status:      LOW STOCK")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="Product category.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--quantity", default="0", show_default=True, help="Opening stock.")
@click.option("--min-stock", "min_stock", default="0", show_default=True,
              help="Low-stock alert threshold.")
@click.option("--description", default="", help="Free-text description.")
def product_add(name: str, category: str, price: str, quantity: str,
                min_stock: str, description: str) -> None:
    """Add a new product to the catalog."""
    try:
        handler = AddProductHandler(ledger_engine())
        dto = handler.handle(
            name=name,
            category=category,
            price=price,
            quantity=quantity,
            min_stock_level=min_stock,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at ${dto.price:.2f} ({dto.quantity} on hand)")


@click.command("list")
@click.option("--search", default=None, help="Match name or description.")
@click.option("--category", default=None, help="Only this category.")
def product_list(search: str | None, category: str | None) -> None:
    """List products in the catalog."""
    try:
        products = ListProductsHandler(ledger_engine()).handle(search=search, category=category)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<20} {'Category':<12} {'Price':>10} {'Qty':>6} {'Min':>5}")
    click.echo("-" * 92)
    for p in products:
        flag = "  LOW" if p.low_stock else ""
        click.echo(
            f"{p.id:<34} {p.name:<20} {p.category:<12} {'$' + format(p.price, '.2f'):>10} "
            f"{p.quantity:>6} {p.min_stock_level:>5}{flag}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a product and its stock history."""
    try:
        handler = ShowProductHandler(ledger_engine())
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)
    history = handler.history(product_id)
    if history:
        click.echo()
        click.echo(f"  {'When':<17} {'Type':<9} {'Qty':>5}  Notes")
        click.echo(f"  {'-'*50}")
        for entry in history:
            click.echo(
                f"  {entry.created_at.strftime('%Y-%m-%d %H:%M'):<17} {entry.type:<9} "
                f"{entry.quantity:>5}  {entry.notes or ''}"
            )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, help="New category.")
@click.option("--description", default=None, help="New description ('' clears it).")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--quantity", default=None, help="New on-hand count (journaled as an adjustment).")
@click.option("--min-stock", "min_stock", default=None, help="New low-stock threshold.")
def product_update(product_id: str, name, category, description, price, quantity, min_stock) -> None:
    """Update product fields; options not given keep their current value."""
    supplied = {
        "name": name,
        "category": category,
        "description": description,
        "price": price,
        "quantity": quantity,
        "min_stock_level": min_stock,
    }
    changes = ProductChanges(**{k: v for k, v in supplied.items() if v is not None})
    if changes.is_empty:
        raise click.UsageError("Nothing to update; pass at least one field option.")

    try:
        handler = UpdateProductHandler(ledger_engine())
        dto = handler.handle(product_id, changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} updated.")
    _display_product(dto)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product (its stock history is kept)."""
    try:
        handler = DeleteProductHandler(ledger_engine())
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' deleted.")
