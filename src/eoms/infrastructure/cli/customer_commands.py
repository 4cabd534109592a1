"""CLI commands for customers."""

from __future__ import annotations

import click

from eoms.domain.exceptions import DomainException
from eoms.infrastructure.bootstrap import order_store


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Contact phone number.")
def customer_add(name: str, phone: str) -> None:
    """Add a new customer."""
    try:
        customer = order_store().add_customer(name=name, phone=phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer added: {customer.name}  (id={customer.id})")


@click.command("list")
def customer_list() -> None:
    """List all customers."""
    try:
        customers = order_store().customers
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<24} {'Name':<24} {'Phone':<15}")
    click.echo("-" * 65)
    for c in customers:
        click.echo(f"{c.id:<24} {c.name:<24} {c.phone:<15}")
