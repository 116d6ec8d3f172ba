"""CLI commands for checkout sales."""

from __future__ import annotations

import click

from ims.application.list_sales import ListSalesHandler
from ims.application.record_sale import RecordSaleHandler
from ims.domain.exceptions import DomainException
from ims.domain.service.ledger_engine import SaleLineRequest
from ims.infrastructure.bootstrap import ledger_engine


def _parse_items(raw: str) -> list[SaleLineRequest]:
    """Parse 'ID:3,ID:5' into SaleLineRequest list."""
    items: list[SaleLineRequest] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        items.append(SaleLineRequest(product_id=product_id.strip(), quantity=qty))
    return items


@click.command("record")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--discount", default="0", show_default=True, help="Discount percent (0-100).")
@click.option("--payment", default="cash", show_default=True,
              type=click.Choice(["cash", "card", "mobile"]), help="Payment method.")
@click.option("--customer", default=None, help="Customer name (default: walk-in).")
def sale_record(items: str, discount: str, payment: str, customer: str | None) -> None:
    """Record a checkout; all lines succeed or none do."""
    lines = _parse_items(items)
    try:
        handler = RecordSaleHandler(ledger_engine())
        receipt = handler.handle(
            lines, discount_percent=discount, payment_method=payment, customer=customer
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    sale = receipt.sale
    click.echo(f"Sale {sale.id} recorded  (payment={sale.payment_method})")
    click.echo(f"Customer: {sale.customer}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in sale.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} "
            f"{'$' + format(line.unit_price, '.2f'):>10} {'$' + format(line.subtotal, '.2f'):>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {'$' + format(sale.subtotal, '.2f'):>20}")
    if sale.discount_percent:
        click.echo(f"  {'Discount':<27} {format(sale.discount_percent, 'f') + '%':>20}")
    click.echo(f"  {'Total':<27} {'$' + format(sale.total, '.2f'):>20}")
    for warning in receipt.warnings:
        click.echo(f"WARNING: {warning}")


@click.command("list")
def sale_list() -> None:
    """List recorded sales."""
    try:
        sales = ListSalesHandler(ledger_engine()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sales:
        click.echo("No sales recorded.")
        return

    click.echo(f"{'When':<17} {'Customer':<20} {'Items':>6} {'Total':>10}  Payment")
    click.echo("-" * 66)
    for s in sales:
        click.echo(
            f"{s.created_at.strftime('%Y-%m-%d %H:%M'):<17} {s.customer:<20} "
            f"{sum(line.quantity for line in s.lines):>6} "
            f"{'$' + format(s.total, '.2f'):>10}  {s.payment_method}"
        )
