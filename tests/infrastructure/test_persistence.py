"""Tests for key-value storage and the repository built on it."""

import json
from decimal import Decimal

import pytest

from eoms.application.order_store import OrderStore
from eoms.domain.model.customer import Customer
from eoms.domain.model.order import Material, PlatingType
from eoms.domain.model.value_objects import Money
from eoms.domain.service.order_query import OrderQuery, run_query
from eoms.infrastructure.persistence.key_value_storage import JsonFileStorage
from eoms.infrastructure.persistence.key_value_store_repository import (
    CUSTOMERS_KEY,
    ORDERS_KEY,
    KeyValueStoreRepository,
)
from tests.fakes import FakeKeyValueStorage, fixed_allocator, make_order, raw_item


class TestJsonFileStorage:

    def test_creates_file_on_first_use(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        JsonFileStorage(path)
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_set_get_remove(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "storage.json")
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"
        assert JsonFileStorage(tmp_path / "storage.json").get_item("k") == "v"
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_missing_key_reads_none(self, tmp_path):
        assert JsonFileStorage(tmp_path / "storage.json").get_item("nope") is None

    def test_malformed_file_reads_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")
        storage = JsonFileStorage(path)
        assert storage.get_item("k") is None
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"


class TestKeyValueStoreRepository:

    def test_empty_storage_loads_empty(self):
        repo = KeyValueStoreRepository(FakeKeyValueStorage())
        assert repo.load_customers() == []
        assert repo.load_orders() == []

    def test_layout_uses_stored_field_names(self):
        storage = FakeKeyValueStorage()
        repo = KeyValueStoreRepository(storage)
        repo.save_all(
            [Customer("CUST-1", "Acme", "555")],
            [make_order(total="12.5", gst_applied=True)],
        )

        customers = json.loads(storage.items[CUSTOMERS_KEY])
        assert customers == [{"id": "CUST-1", "name": "Acme", "phone": "555"}]

        order = json.loads(storage.items[ORDERS_KEY])[0]
        assert order["customer"] == {"id": "CUST-1", "name": "Acme"}
        assert order["gstApply"] == "yes"
        assert order["createdAt"] == "2024-05-10"
        assert order["orderTotal"] == 12.5
        item = order["items"][0]
        assert item["itemName"] == "Brackets"
        assert item["material"] == "Brass"
        assert item["platingTypes"] == ["Chrome"]
        assert item["platingPrices"] == [12.5]
        assert item["quantity"] == 1
        assert item["itemRatePerKg"] == 12.5
        assert item["itemTotal"] == 12.5

    def test_round_trip(self):
        storage = FakeKeyValueStorage()
        repo = KeyValueStoreRepository(storage)
        store = OrderStore(repo, allocator=fixed_allocator())
        customer = store.add_customer("Acme", "555")
        created = store.create_order(
            customer.id, "In Progress", True, "2024-05-10",
            [raw_item(qty="2.5", prices=("99.99", "0.5"))],
        )

        reloaded = OrderStore(KeyValueStoreRepository(storage))
        order = reloaded.get_order(created.id)
        assert reloaded.customers == (customer,)
        assert order.customer.name == "Acme"
        assert order.status == "In Progress"
        assert order.gst_applied is True
        item = order.items[0]
        assert item.material is Material.BRASS
        assert item.plating_types == (PlatingType.CHROME, PlatingType.ZINC)
        assert item.quantity.kg == Decimal("2.5")
        assert item.line_total == created.items[0].line_total
        assert order.order_total == created.order_total

    def test_malformed_collection_loads_empty(self):
        storage = FakeKeyValueStorage(
            {
                CUSTOMERS_KEY: "not json",
                ORDERS_KEY: json.dumps([{"id": "ORD-0001"}]),
            }
        )
        repo = KeyValueStoreRepository(storage)
        assert repo.load_customers() == []
        assert repo.load_orders() == []

    @pytest.mark.parametrize("field", ["id", "status", "createdAt"])
    def test_non_text_field_loads_empty(self, field):
        storage = FakeKeyValueStorage()
        repo = KeyValueStoreRepository(storage)
        repo.save_all([], [make_order()])
        records = json.loads(storage.items[ORDERS_KEY])
        records[0][field] = None
        storage.items[ORDERS_KEY] = json.dumps(records)

        store = OrderStore(KeyValueStoreRepository(storage))
        assert store.orders == ()
        assert run_query(store.orders, OrderQuery(search="zzz")).page_rows == []

    def test_non_text_customer_snapshot_loads_empty(self):
        storage = FakeKeyValueStorage()
        repo = KeyValueStoreRepository(storage)
        repo.save_all([Customer("CUST-1", "Acme", "555")], [make_order()])
        records = json.loads(storage.items[ORDERS_KEY])
        records[0]["customer"]["name"] = 42
        storage.items[ORDERS_KEY] = json.dumps(records)
        assert repo.load_orders() == []
        assert len(repo.load_customers()) == 1

    def test_free_text_status_survives(self):
        storage = FakeKeyValueStorage()
        repo = KeyValueStoreRepository(storage)
        repo.save_all([], [make_order(status="On Hold")])
        assert repo.load_orders()[0].status == "On Hold"

    def test_clear_removes_both_keys(self):
        storage = FakeKeyValueStorage({CUSTOMERS_KEY: "[]", ORDERS_KEY: "[]", "other": "x"})
        KeyValueStoreRepository(storage).clear()
        assert storage.items == {"other": "x"}

    def test_totals_reload_exactly(self):
        storage = FakeKeyValueStorage()
        repo = KeyValueStoreRepository(storage)
        repo.save_all([], [make_order(total="590")])
        assert repo.load_orders()[0].order_total == Money.of("590.00")
