"""CLI commands for the Order aggregate."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

import click

from eoms.application.dto import OrderDetailsDTO, OrderPageDTO
from eoms.application.list_orders import ListOrdersHandler
from eoms.application.show_order import ShowOrderHandler
from eoms.domain.exceptions import DomainException, OrderNotFoundError
from eoms.domain.model.order import Order, OrderStatus
from eoms.domain.service.order_query import (
    DEFAULT_PAGE_SIZE,
    OrderQuery,
    SortColumn,
    SortDirection,
    SortState,
    clamp_page,
)
from eoms.domain.service.pricing import RawItem
from eoms.infrastructure.bootstrap import order_store

ITEM_FORMAT = "'Name|Material|Plating,Plating|Price,Price|Kg'"


def _parse_item(raw: str) -> RawItem:
    """Parse 'Brackets|Brass|Chrome,Zinc|100,150|2.5' into a RawItem.

    Only the shape is checked here; values are validated by the pricing
    service so every bad item is reported together.
    """
    parts = [p.strip() for p in raw.split("|")]
    if len(parts) != 5:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected {ITEM_FORMAT}."
        )
    name, material, types, prices, quantity = parts
    return RawItem(
        item_name=name,
        material=material,
        plating_types=_split_list(types),
        plating_prices=_split_list(prices),
        quantity_kg=quantity,
    )


def _split_list(text: str) -> list[str]:
    """Comma-separated entries; blank entries are kept so counts still line up."""
    if not text:
        return []
    return [part.strip() for part in text.split(",")]


def _raw_items_from(order: Order) -> list[RawItem]:
    """Re-submit an order's existing items (used when updating header fields only)."""
    return [
        RawItem(
            item_name=item.item_name,
            material=item.material,
            plating_types=list(item.plating_types),
            plating_prices=[p.amount for p in item.plating_prices],
            quantity_kg=item.quantity.kg,
        )
        for item in order.items
    ]


def _display_order(dto: OrderDetailsDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}  (phone {dto.customer_phone})")
    click.echo(f"Date:     {dto.order_date}")
    click.echo(f"GST:      {dto.gst_label}")
    click.echo()
    for index, item in enumerate(dto.items, start=1):
        click.echo(f"  Item {index}: {item.item_name}")
        click.echo(f"    Material:       {item.material}")
        click.echo(f"    Plating Types:  {item.plating_types}")
        click.echo(f"    Prices (/kg):   {item.plating_prices}")
        click.echo(f"    Quantity (kg):  {item.quantity}")
        click.echo(f"    Rate per kg:    {item.rate_per_kg}")
        click.echo(f"    Item Total:     {item.line_total}")
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Grand Total':<27} {dto.total:>20}")


def _display_page(page: OrderPageDTO) -> None:
    if page.rows:
        click.echo(
            f"{'Order ID':<10} {'Customer':<18} {'Items':<30} {'Total':>12} "
            f"{'Status':<12} {'Date':<10}"
        )
        click.echo("-" * 97)
        for row in page.rows:
            click.echo(
                f"{row.id:<10} {row.customer_name:<18} {row.item_summary:<30} "
                f"{row.total:>12} {row.status:<12} {row.order_date:<10}"
            )
        click.echo()
    click.echo(page.showing_label)
    if page.total_pages > 1:
        click.echo(f"Page {page.page} of {page.total_pages}")

    s = page.summary
    click.echo()
    click.echo(
        f"Total orders: {s.total_orders}  Pending: {s.open_orders}  "
        f"Completed: {s.closed_orders}  Revenue: {s.total_revenue}"
    )


_status_option = click.option(
    "--status",
    help=f"Order status ({', '.join(s.value for s in OrderStatus)}).",
)
_gst_option = click.option(
    "--gst",
    type=click.Choice(["yes", "no"]),
    help="Apply 18% GST to every item (yes/no).",
)
_date_option = click.option("--date", "order_date", help="Order date, YYYY-MM-DD.")
_item_option = click.option(
    "--item",
    "items",
    multiple=True,
    help=f"Item as {ITEM_FORMAT}. Repeat for several items.",
)


@click.command("create")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@_status_option
@_gst_option
@_date_option
@_item_option
def order_create(
    customer_id: str,
    status: str | None,
    gst: str | None,
    order_date: str | None,
    items: tuple[str, ...],
) -> None:
    """Create a new plating order."""
    raw_items = [_parse_item(raw) for raw in items]

    try:
        store = order_store()
        order = store.create_order(
            customer_id=customer_id,
            status=status or OrderStatus.PENDING.value,
            gst_applied=gst != "no",
            order_date=order_date or date.today().isoformat(),
            raw_items=raw_items,
        )
        dto = ShowOrderHandler(store).handle(order.id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order.id} created.")
    _display_order(dto)


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--customer", "customer_id", help="Customer ID.")
@_status_option
@_gst_option
@_date_option
@_item_option
def order_update(
    order_id: str,
    customer_id: str | None,
    status: str | None,
    gst: str | None,
    order_date: str | None,
    items: tuple[str, ...],
) -> None:
    """Update an existing order; omitted options keep their current values.

    Passing any --item replaces the whole item list.
    """
    raw_items = [_parse_item(raw) for raw in items]

    try:
        store = order_store()
        existing = store.get_order(order_id)
        if existing is None:
            raise OrderNotFoundError(order_id)
        order = store.update_order(
            order_id=order_id,
            customer_id=customer_id or existing.customer.id,
            status=status or existing.status,
            gst_applied=existing.gst_applied if gst is None else gst == "yes",
            order_date=order_date or existing.order_date,
            raw_items=raw_items or _raw_items_from(existing),
        )
        dto = ShowOrderHandler(store).handle(order.id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order.id} updated.")
    _display_order(dto)


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
@click.confirmation_option(prompt="Are you sure you want to delete this order?")
def order_delete(order_id: str) -> None:
    """Delete an order."""
    try:
        order_store().delete_order(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} deleted.")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(order_store()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--search", default="", help="Search id, customer, status, items.")
@click.option("--status", default="", help="Only orders with this exact status.")
@click.option("--customer", "customer_id", default="", help="Only this customer ID.")
@click.option("--month", default="", help="Only orders dated in this month (YYYY-MM).")
@click.option(
    "--sort",
    "sort_column",
    type=click.Choice([c.value for c in SortColumn]),
    default=None,
    help="Sort column (default: createdAt, newest first).",
)
@click.option(
    "--direction",
    type=click.Choice([d.value for d in SortDirection]),
    default=None,
    help="Sort direction (default: asc when --sort is given).",
)
@click.option("--page", default=1, type=int, help="Page number.")
@click.option("--page-size", default=DEFAULT_PAGE_SIZE, type=int, help="Rows per page.")
def order_list(
    search: str,
    status: str,
    customer_id: str,
    month: str,
    sort_column: str | None,
    direction: str | None,
    page: int,
    page_size: int,
) -> None:
    """List orders with search, filters, sorting and pagination."""
    sort = SortState()
    if sort_column is not None:
        # Same as clicking a column heading on the default newest-first table.
        sort = sort.toggled(SortColumn(sort_column))
    if direction is not None:
        sort = SortState(sort.column, SortDirection(direction))

    query = OrderQuery(
        search=search,
        status=status,
        customer_id=customer_id,
        month=month,
        sort=sort,
        page=page,
        page_size=page_size,
    )

    try:
        handler = ListOrdersHandler(order_store())
        result = handler.handle(query)
        clamped = clamp_page(page, result.total_pages)
        if clamped != page:
            result = handler.handle(replace(query, page=clamped))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_page(result)
