import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from eoms.domain.exceptions import DomainException
from eoms.infrastructure.bootstrap import order_store
from eoms.infrastructure.cli.customer_commands import customer_add, customer_list
from eoms.infrastructure.cli.export_commands import export_csv, monthly_bill
from eoms.infrastructure.cli.item_commands import item_suggest
from eoms.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_update,
)

RESET_CONFIRMATION = "DELETE"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
    logging.getLogger("eoms").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """EOMS: Electroplating Order Management System."""
    _configure_logging(verbose)


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def item() -> None:
    """Item name helpers."""


@cli.group()
def export() -> None:
    """Export orders."""


@cli.command("reset")
@click.option(
    "--confirm",
    "confirmation",
    prompt=f'Type "{RESET_CONFIRMATION}" to remove all customers and orders',
    help=f'Must be "{RESET_CONFIRMATION}".',
)
def reset(confirmation: str) -> None:
    """Remove all customers and orders."""
    if confirmation != RESET_CONFIRMATION:
        raise click.ClickException(
            f'Type "{RESET_CONFIRMATION}" to confirm data deletion.'
        )

    try:
        order_store().reset_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("All data has been cleared!")


# Register subcommands
customer.add_command(customer_add)
customer.add_command(customer_list)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_update)
item.add_command(item_suggest)
export.add_command(export_csv)
cli.add_command(monthly_bill)
