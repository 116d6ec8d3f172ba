"""CLI commands for read-only reports."""

from __future__ import annotations

from datetime import datetime

import click

from ims.application.show_dashboard import ShowDashboardHandler
from ims.application.show_sales_report import ShowSalesReportHandler
from ims.application.show_stock_alerts import ShowStockAlertsHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.value_objects import DateRange
from ims.infrastructure.bootstrap import ledger_engine, settings

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _range(start: datetime | None, end: datetime | None) -> DateRange | None:
    try:
        return DateRange.from_dates(
            start.date() if start else None, end.date() if end else None
        )
    except DomainException as exc:
        raise click.BadParameter(str(exc))


@click.command("dashboard")
def report_dashboard() -> None:
    """Headline figures for the shop."""
    try:
        dto = ShowDashboardHandler(ledger_engine()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Products:         {dto.product_count}")
    click.echo(f"Inventory value:  ${dto.inventory_value:.2f}")
    click.echo(f"Low stock:        {dto.low_stock_count}")
    click.echo(f"Out of stock:     {dto.out_of_stock_count}")
    click.echo(f"Sales:            {dto.sales_count}  (${dto.sales_total:.2f})")


@click.command("low-stock")
def report_low_stock() -> None:
    """Products at or below their minimum stock level."""
    try:
        products = ShowStockAlertsHandler(ledger_engine()).low_stock()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("All products are above their minimum stock level.")
        return

    click.echo(f"{'Product':<20} {'On hand':>8} {'Minimum':>8}")
    click.echo("-" * 38)
    for p in products:
        click.echo(f"{p.name:<20} {p.quantity:>8} {p.min_stock_level:>8}")


@click.command("top-selling")
@click.option("--n", "limit", default=None, type=int, help="How many products to show.")
@click.option("--start", default=None, type=_DATE, help="First day (YYYY-MM-DD).")
@click.option("--end", default=None, type=_DATE, help="Last day (YYYY-MM-DD).")
def report_top_selling(limit: int | None, start, end) -> None:
    """Products ranked by units sold."""
    date_range = _range(start, end)
    try:
        handler = ShowSalesReportHandler(ledger_engine(), top_n=settings().top_sellers)
        rows = handler.top_selling(limit, date_range)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No sales in this period.")
        return

    click.echo(f"{'#':>2}  {'Product':<20} {'Units':>6} {'Revenue':>10}")
    click.echo("-" * 42)
    for rank, row in enumerate(rows, start=1):
        click.echo(
            f"{rank:>2}  {row.product_name:<20} {row.quantity:>6} "
            f"{'$' + format(row.revenue, '.2f'):>10}"
        )


@click.command("sales")
@click.option("--start", default=None, type=_DATE, help="First day (YYYY-MM-DD).")
@click.option("--end", default=None, type=_DATE, help="Last day (YYYY-MM-DD).")
def report_sales(start, end) -> None:
    """Sales totals and stock movement for a period."""
    date_range = _range(start, end)
    try:
        handler = ShowSalesReportHandler(ledger_engine(), top_n=settings().top_sellers)
        dto = handler.handle(date_range)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sales:              {dto.sales_count}")
    click.echo(f"Sales total:        ${dto.sales_total:.2f}")
    click.echo(f"Average sale:       ${dto.average_sale:.2f}")
    click.echo(f"Units received:     {dto.units_received}")
    click.echo(f"Stock transactions: {dto.transaction_count}")
    click.echo(f"Low-stock products: {dto.low_stock_count}")
