"""CLI commands for exports: CSV of all orders and the monthly PDF bill."""

from __future__ import annotations

from pathlib import Path

import click

from eoms.application.monthly_bill import MonthlyBillHandler
from eoms.domain.exceptions import DomainException
from eoms.infrastructure.bootstrap import order_store
from eoms.infrastructure.export.csv_export import DEFAULT_FILENAME, export_orders_csv
from eoms.infrastructure.export.pdf_bill import bill_filename, render_bill_pdf


@click.command("csv")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_FILENAME,
    show_default=True,
    help="Destination CSV file.",
)
def export_csv(output: Path) -> None:
    """Export every order to a CSV file."""
    try:
        orders = order_store().orders
    except DomainException as exc:
        raise click.ClickException(str(exc))

    count = export_orders_csv(orders, output)
    click.echo(f"Exported {count} orders to {output}")


@click.command("bill")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--month", required=True, help="Billing month, YYYY-MM.")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory for the generated PDF.",
)
def monthly_bill(customer_id: str, month: str, output_dir: Path) -> None:
    """Generate a customer's monthly bill as a PDF."""
    try:
        bill = MonthlyBillHandler(order_store()).handle(customer_id, month)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    path = render_bill_pdf(bill, output_dir / bill_filename(bill))
    click.echo(f"Bill for {bill.customer_name} ({bill.month}): {len(bill.rows)} items")
    click.echo(f"Grand Total: ₹{bill.grand_total}")
    click.echo(f"Saved to {path}")
