import click
import uvicorn

from ims.infrastructure import bootstrap

from ims.infrastructure.cli.customer_commands import (
    customer_add,
    customer_delete,
    customer_list,
    customer_update,
)
from ims.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from ims.infrastructure.cli.report_commands import (
    report_dashboard,
    report_low_stock,
    report_sales,
    report_top_selling,
)
from ims.infrastructure.cli.sale_commands import sale_list, sale_record
from ims.infrastructure.cli.stock_commands import stock_history, stock_post
from ims.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """IMS: Inventory Management System"""
    configure_logging(bootstrap.settings().log_level)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def stock() -> None:
    """Post and review stock movements."""


@cli.group()
def sale() -> None:
    """Record and review sales."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def report() -> None:
    """Read-only reports."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default from IMS_HOST).")
@click.option("--port", default=None, type=int, help="Port (default from IMS_PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    from ims.infrastructure.api.app import create_app

    config = bootstrap.settings()
    app = create_app(engine=bootstrap.ledger_engine(config), settings=config)
    uvicorn.run(app, host=host or config.host, port=port or config.port)


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
stock.add_command(stock_history)
stock.add_command(stock_post)
sale.add_command(sale_list)
sale.add_command(sale_record)
customer.add_command(customer_add)
customer.add_command(customer_delete)
customer.add_command(customer_list)
customer.add_command(customer_update)
report.add_command(report_dashboard)
report.add_command(report_low_stock)
report.add_command(report_sales)
report.add_command(report_top_selling)
