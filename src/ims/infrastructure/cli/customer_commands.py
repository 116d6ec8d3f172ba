"""CLI commands for customers."""

from __future__ import annotations

import click

from ims.application.add_customer import AddCustomerHandler
from ims.application.delete_customer import DeleteCustomerHandler
from ims.application.list_customers import ListCustomersHandler
from ims.application.update_customer import UpdateCustomerHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.customer import CustomerChanges
from ims.infrastructure.bootstrap import ledger_engine


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", default=None, help="Email address.")
@click.option("--phone", default=None, help="Phone number.")
@click.option("--points", default="0", show_default=True, help="Loyalty points.")
def customer_add(name: str, email: str | None, phone: str | None, points: str) -> None:
    """Add a customer."""
    try:
        handler = AddCustomerHandler(ledger_engine())
        dto = handler.handle(name=name, email=email, phone=phone, loyalty_points=points)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {dto.id} '{dto.name}' added.")


@click.command("list")
@click.option("--search", default=None, help="Match name, email or phone.")
def customer_list(search: str | None) -> None:
    """List customers."""
    try:
        customers = ListCustomersHandler(ledger_engine()).handle(search)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<34} {'Name':<20} {'Email':<24} {'Phone':<12} {'Points':>6}")
    click.echo("-" * 100)
    for c in customers:
        click.echo(f"{c.id:<34} {c.name:<20} {c.email:<24} {c.phone:<12} {c.loyalty_points:>6}")


@click.command("update")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.option("--name", default=None)
@click.option("--email", default=None)
@click.option("--phone", default=None)
@click.option("--points", default=None, help="Loyalty points.")
def customer_update(customer_id: str, name, email, phone, points) -> None:
    """Update customer fields; options not given keep their current value."""
    supplied = {"name": name, "email": email, "phone": phone, "loyalty_points": points}
    changes = CustomerChanges(**{k: v for k, v in supplied.items() if v is not None})
    if changes == CustomerChanges():
        raise click.UsageError("Nothing to update; pass at least one field option.")
    try:
        handler = UpdateCustomerHandler(ledger_engine())
        dto = handler.handle(customer_id, changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {dto.id} updated.")


@click.command("delete")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
def customer_delete(customer_id: str) -> None:
    """Remove a customer."""
    try:
        handler = DeleteCustomerHandler(ledger_engine())
        dto = handler.handle(customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {dto.id} '{dto.name}' deleted.")
