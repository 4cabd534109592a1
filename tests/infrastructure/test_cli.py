"""End-to-end tests for the click command line, backed by a temp data dir."""

import pytest
from click.testing import CliRunner

from eoms.infrastructure.bootstrap import DATA_DIR_ENV, order_store
from eoms.infrastructure.cli.main import cli

ITEM = "Brackets|Brass|Chrome,Zinc|100,150|2"


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "data"))
    return CliRunner()


@pytest.fixture
def customer_id(runner):
    result = runner.invoke(cli, ["customer", "add", "--name", "Acme", "--phone", "555"])
    assert result.exit_code == 0, result.output
    return order_store().customers[0].id


def _create_order(runner, customer_id, *extra):
    args = ["order", "create", "--customer", customer_id, "--date", "2024-05-10", "--item", ITEM]
    return runner.invoke(cli, args + list(extra))


class TestCustomerCommands:

    def test_add_and_list(self, runner, customer_id):
        result = runner.invoke(cli, ["customer", "list"])
        assert result.exit_code == 0
        assert customer_id in result.output
        assert "Acme" in result.output

    def test_list_empty(self, runner):
        result = runner.invoke(cli, ["customer", "list"])
        assert "No customers found." in result.output

    def test_add_rejects_blank_name(self, runner):
        result = runner.invoke(cli, ["customer", "add", "--name", " ", "--phone", "555"])
        assert result.exit_code != 0
        assert "Please enter both customer name and phone" in result.output


class TestOrderCommands:

    def test_create_prices_with_gst_by_default(self, runner, customer_id):
        result = _create_order(runner, customer_id)
        assert result.exit_code == 0, result.output
        assert "Order ORD-0001 created." in result.output
        assert "₹590.00" in result.output
        assert "Yes (18%)" in result.output

    def test_create_without_gst(self, runner, customer_id):
        result = _create_order(runner, customer_id, "--gst", "no")
        assert result.exit_code == 0, result.output
        assert "₹500.00" in result.output

    def test_create_reports_every_bad_item(self, runner, customer_id):
        result = runner.invoke(
            cli,
            [
                "order", "create", "--customer", customer_id,
                "--item", "|Brass|Chrome|100|1",
                "--item", ITEM,
                "--item", "Pipes|Brass|Chrome,Zinc|100|1",
            ],
        )
        assert result.exit_code != 0
        assert "Item 1:" in result.output
        assert "Item 3:" in result.output
        assert "Item 2:" not in result.output
        assert order_store().orders == ()

    def test_create_rejects_malformed_item(self, runner, customer_id):
        result = runner.invoke(
            cli, ["order", "create", "--customer", customer_id, "--item", "Brackets|Brass"]
        )
        assert result.exit_code != 0
        assert "Invalid item format" in result.output

    def test_blank_price_entry_counts_towards_mismatch(self, runner, customer_id):
        result = runner.invoke(
            cli,
            ["order", "create", "--customer", customer_id,
             "--item", "Brackets|Brass|Chrome,Zinc|100,,150|2"],
        )
        assert result.exit_code != 0
        assert "Number of plating prices (3) must match plating types (2)" in result.output
        assert order_store().orders == ()

    def test_blank_price_entry_is_invalid(self, runner, customer_id):
        result = runner.invoke(
            cli,
            ["order", "create", "--customer", customer_id,
             "--item", "Brackets|Brass|Chrome,Zinc|100,|2"],
        )
        assert result.exit_code != 0
        assert "Invalid plating price" in result.output

    def test_create_requires_items(self, runner, customer_id):
        result = runner.invoke(cli, ["order", "create", "--customer", customer_id])
        assert result.exit_code != 0
        assert "Please add at least one item to the order" in result.output

    def test_update_keeps_omitted_fields(self, runner, customer_id):
        _create_order(runner, customer_id)
        result = runner.invoke(
            cli, ["order", "update", "--id", "ORD-0001", "--status", "Completed"]
        )
        assert result.exit_code == 0, result.output
        order = order_store().get_order("ORD-0001")
        assert order.status == "Completed"
        assert order.order_date == "2024-05-10"
        assert str(order.order_total) == "₹590.00"

    def test_update_unknown_order(self, runner, customer_id):
        result = runner.invoke(cli, ["order", "update", "--id", "ORD-0042"])
        assert result.exit_code != 0
        assert "Order 'ORD-0042' not found" in result.output

    def test_show(self, runner, customer_id):
        _create_order(runner, customer_id)
        result = runner.invoke(cli, ["order", "show", "--id", "ORD-0001"])
        assert result.exit_code == 0
        assert "Customer: Acme  (phone 555)" in result.output

    def test_delete(self, runner, customer_id):
        _create_order(runner, customer_id)
        result = runner.invoke(cli, ["order", "delete", "--id", "ORD-0001", "--yes"])
        assert result.exit_code == 0
        assert order_store().orders == ()

    def test_list_with_summary(self, runner, customer_id):
        _create_order(runner, customer_id)
        _create_order(runner, customer_id, "--status", "Completed")
        result = runner.invoke(cli, ["order", "list", "--status", "Completed"])
        assert result.exit_code == 0, result.output
        assert "ORD-0002" in result.output
        assert "ORD-0001" not in result.output
        assert "Showing 1 of 1 orders" in result.output
        assert "Total orders: 2" in result.output
        assert "Revenue: ₹1180.00" in result.output

    def test_list_clamps_page(self, runner, customer_id):
        _create_order(runner, customer_id)
        result = runner.invoke(cli, ["order", "list", "--page", "9"])
        assert result.exit_code == 0
        assert "ORD-0001" in result.output

    def test_list_empty(self, runner):
        result = runner.invoke(cli, ["order", "list"])
        assert result.exit_code == 0
        assert "Showing 0 of 0 orders" in result.output

    def test_sort_column_starts_ascending(self, runner, customer_id):
        _create_order(runner, customer_id)
        _create_order(runner, customer_id, "--gst", "no")
        result = runner.invoke(cli, ["order", "list", "--sort", "orderTotal"])
        assert result.exit_code == 0, result.output
        assert result.output.index("ORD-0002") < result.output.index("ORD-0001")

    def test_sort_direction_override(self, runner, customer_id):
        _create_order(runner, customer_id)
        _create_order(runner, customer_id, "--gst", "no")
        result = runner.invoke(
            cli, ["order", "list", "--sort", "orderTotal", "--direction", "desc"]
        )
        assert result.output.index("ORD-0001") < result.output.index("ORD-0002")


class TestItemCommands:

    def test_suggest(self, runner):
        result = runner.invoke(cli, ["item", "suggest", "valv"])
        assert result.output.splitlines() == ["Valves"]

    def test_no_suggestions(self, runner):
        result = runner.invoke(cli, ["item", "suggest", "zzz"])
        assert "No suggestions." in result.output


class TestExportCommands:

    def test_csv(self, runner, customer_id, tmp_path):
        _create_order(runner, customer_id)
        output = tmp_path / "orders.csv"
        result = runner.invoke(cli, ["export", "csv", "--output", str(output)])
        assert result.exit_code == 0, result.output
        assert "Exported 1 orders" in result.output
        assert "ORD-0001" in output.read_text(encoding="utf-8")

    def test_bill(self, runner, customer_id, tmp_path):
        _create_order(runner, customer_id)
        result = runner.invoke(
            cli,
            ["bill", "--customer", customer_id, "--month", "2024-05",
             "--output-dir", str(tmp_path / "bills")],
        )
        assert result.exit_code == 0, result.output
        assert "Grand Total: ₹590.00" in result.output
        assert (tmp_path / "bills" / "Bill_Acme_2024-05.pdf").exists()

    def test_bill_without_orders(self, runner, customer_id, tmp_path):
        result = runner.invoke(
            cli, ["bill", "--customer", customer_id, "--month", "2024-05",
                  "--output-dir", str(tmp_path)],
        )
        assert result.exit_code != 0
        assert "No orders found for Acme in 2024-05" in result.output


class TestReset:

    def test_requires_exact_confirmation(self, runner, customer_id):
        result = runner.invoke(cli, ["reset", "--confirm", "delete"])
        assert result.exit_code != 0
        assert len(order_store().customers) == 1

    def test_clears_everything(self, runner, customer_id):
        _create_order(runner, customer_id)
        result = runner.invoke(cli, ["reset"], input="DELETE\n")
        assert result.exit_code == 0
        assert "All data has been cleared!" in result.output
        store = order_store()
        assert store.customers == ()
        assert store.orders == ()
