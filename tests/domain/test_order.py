"""Unit tests for the Order aggregate and its line items."""

import pytest

from eoms.domain.exceptions import MissingFieldError, ValidationError
from eoms.domain.model.catalog import suggest_item_names
from eoms.domain.model.customer import Customer, CustomerRef
from eoms.domain.model.order import (
    Order,
    PlatingLineItem,
    PlatingType,
    parse_order_date,
)
from eoms.domain.model.value_objects import Money, Weight
from tests.fakes import make_order


def _items():
    return make_order().items


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(
            "ORD-0001",
            CustomerRef("CUST-1", "Acme"),
            " Pending ",
            True,
            "2024-05-10",
            _items(),
            Money.of("100"),
        )
        assert order.status == "Pending"
        assert order.customer.name == "Acme"

    def test_free_text_status_tolerated(self):
        order = Order.create(
            "ORD-0001", CustomerRef("C", "A"), "On Hold", False, "2024-05-10",
            _items(), Money.of("100"),
        )
        assert order.status == "On Hold"

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create(
                "ORD-0001", CustomerRef("C", "A"), "Pending", False, "2024-05-10",
                [], Money.zero(),
            )

    def test_blank_status_rejected(self):
        with pytest.raises(MissingFieldError) as excinfo:
            Order.create(
                "ORD-0001", CustomerRef("C", "A"), " ", False, "2024-05-10",
                _items(), Money.of("100"),
            )
        assert excinfo.value.field == "status"


class TestOrderRevise:

    def test_replaces_everything_but_id(self):
        order = make_order()
        new_items = make_order(item_name="Gears", total="42").items
        order.revise(
            CustomerRef("CUST-9", "Other"), "Completed", True, "2024-07-01",
            new_items, Money.of("42"),
        )
        assert order.id == "ORD-0001"
        assert order.customer == CustomerRef("CUST-9", "Other")
        assert order.status == "Completed"
        assert order.gst_applied is True
        assert order.order_date == "2024-07-01"
        assert order.items[0].item_name == "Gears"
        assert order.order_total == Money.of("42")

    def test_invalid_revision_leaves_order_untouched(self):
        order = make_order()
        with pytest.raises(ValidationError):
            order.revise(
                CustomerRef("CUST-9", "Other"), "Completed", True, "07/01/2024",
                order.items, Money.of("1"),
            )
        assert order.customer.name == "Acme"
        assert order.status == "Pending"


class TestOrderDisplay:

    def test_sequence_number(self):
        assert make_order("ORD-0042").sequence_number == 42
        assert make_order("legacy").sequence_number == 0

    def test_item_summary(self):
        assert make_order(item_name="Valves").item_summary == "Valves (1kg)"


class TestLineItem:

    def test_types_and_prices_must_align(self):
        with pytest.raises(ValidationError, match="position-aligned"):
            PlatingLineItem(
                item_name="Nuts",
                material=make_order().items[0].material,
                plating_types=(PlatingType.ZINC, PlatingType.GOLD),
                plating_prices=(Money.of("1"),),
                quantity=Weight.of("1"),
                rate_per_kg=Money.of("1"),
                line_total=Money.of("1"),
            )


class TestParseOrderDate:

    def test_accepts_iso_date(self):
        assert parse_order_date("2024-02-29") == "2024-02-29"

    @pytest.mark.parametrize("value", ["2023-02-29", "2024-5-1", "10/05/2024"])
    def test_rejects_bad_dates(self, value):
        with pytest.raises(ValidationError):
            parse_order_date(value)

    def test_missing(self):
        with pytest.raises(MissingFieldError):
            parse_order_date(None)


class TestCustomerSnapshot:

    def test_snapshot_copies_identity(self):
        customer = Customer("CUST-1", "Acme", "555")
        assert CustomerRef.snapshot(customer) == CustomerRef("CUST-1", "Acme")


class TestItemSuggestions:

    def test_substring_match(self):
        assert suggest_item_names("sh") == ["Sheets", "Washers", "Shafts", "Bushings"]

    def test_case_insensitive(self):
        assert suggest_item_names("VALV") == ["Valves"]

    def test_empty_input_has_no_suggestions(self):
        assert suggest_item_names("  ") == []
