# tests/test_cart_store.py

"""Tests for CartStore mutations, totals and persistence."""

import json
import tempfile
import unittest
from pathlib import Path

from schemas.product import ProductOut
from sqlalchemy.exc import OperationalError

from utils.cart_store import CartStore, DatabaseCartStorage, JsonFileCartStorage, MemoryCartStorage

KEY = "veg-wholesale-cart"


def _p(pid: int, name: str, price: float, unit: str = "kg") -> ProductOut:
    return ProductOut(id=pid, name=name, slug=name.lower(), price_per_kg=price, unit=unit,
                      images=[f"/uploads/{pid}.jpg"])


ONION = _p(1, "Onion", 40)
TOMATO = _p(2, "Tomato", 30)


class TestCartMutations(unittest.TestCase):
    """add/remove/update/clear semantics."""

    def setUp(self) -> None:
        self.storage = MemoryCartStorage()
        self.cart = CartStore(self.storage, key=KEY)

    def test_new_cart_is_empty(self) -> None:
        self.assertEqual(self.cart.items, [])
        self.assertEqual(self.cart.total(), 0)
        self.assertEqual(self.cart.item_count(), 0)

    def test_adding_same_product_merges_lines(self) -> None:
        """Two adds of one product give one line with summed quantity."""
        self.cart.add_item(ONION, 3)
        self.cart.add_item(ONION, 2)
        self.assertEqual(len(self.cart.items), 1)
        self.assertEqual(self.cart.items[0].qty, 5)

    def test_lines_keep_insertion_order(self) -> None:
        self.cart.add_item(TOMATO, 1)
        self.cart.add_item(ONION, 1)
        self.cart.add_item(TOMATO, 1)
        self.assertEqual([line.id for line in self.cart.items], [2, 1])

    def test_add_non_positive_qty_is_ignored(self) -> None:
        self.cart.add_item(ONION, 0)
        self.cart.add_item(ONION, -2)
        self.assertEqual(self.cart.items, [])

    def test_update_qty_sets_exact_value(self) -> None:
        self.cart.add_item(ONION, 3)
        self.cart.update_qty(ONION.id, 7)
        self.assertEqual(self.cart.items[0].qty, 7)

    def test_update_qty_zero_or_negative_removes_line(self) -> None:
        self.cart.add_item(ONION, 3)
        self.cart.add_item(TOMATO, 1)
        self.cart.update_qty(ONION.id, 0)
        self.assertEqual([line.id for line in self.cart.items], [TOMATO.id])
        self.cart.update_qty(TOMATO.id, -5)
        self.assertEqual(self.cart.items, [])

    def test_update_unknown_id_is_noop(self) -> None:
        self.cart.add_item(ONION, 1)
        self.cart.update_qty(99, 4)
        self.assertEqual([(line.id, line.qty) for line in self.cart.items], [(1, 1)])

    def test_remove_twice_is_noop(self) -> None:
        self.cart.add_item(ONION, 1)
        self.cart.add_item(TOMATO, 1)
        self.cart.remove_item(ONION.id)
        self.cart.remove_item(ONION.id)
        self.assertEqual([line.id for line in self.cart.items], [TOMATO.id])

    def test_clear_cart(self) -> None:
        self.cart.add_item(ONION, 2)
        self.cart.add_item(TOMATO, 2)
        self.cart.clear_cart()
        self.assertEqual(self.cart.items, [])
        self.assertEqual(self.cart.total(), 0)

    def test_total_and_item_count(self) -> None:
        self.cart.add_item(ONION, 2)   # 80
        self.cart.add_item(TOMATO, 3)  # 90
        self.assertEqual(self.cart.total(), 170)
        self.assertEqual(self.cart.item_count(), 5)

    def test_price_is_snapshotted_at_add_time(self) -> None:
        """A later catalog price change does not touch existing lines."""
        self.cart.add_item(ONION, 2)
        repriced = ONION.model_copy(update={"price_per_kg": 90})
        self.cart.add_item(repriced, 1)
        self.assertEqual(self.cart.items[0].price_per_kg, 40)
        self.assertEqual(self.cart.total(), 120)

    def test_end_to_end_scenario(self) -> None:
        self.cart.add_item(ONION, 3)
        self.cart.add_item(ONION, 2)
        self.cart.update_qty(ONION.id, 1)
        self.assertEqual(self.cart.total(), 1 * ONION.price_per_kg)

    def test_items_view_is_a_copy(self) -> None:
        self.cart.add_item(ONION, 1)
        self.cart.items.clear()
        self.assertEqual(len(self.cart.items), 1)


class TestCartPersistence(unittest.TestCase):
    """State is written on every mutation and restored on construction."""

    def test_reload_reproduces_lines(self) -> None:
        storage = MemoryCartStorage()
        cart = CartStore(storage, key=KEY)
        cart.add_item(ONION, 3)
        cart.add_item(TOMATO, 1)
        cart.update_qty(TOMATO.id, 4)

        reloaded = CartStore(storage, key=KEY)
        self.assertEqual(
            {(line.id, line.qty) for line in reloaded.items},
            {(1, 3), (2, 4)},
        )
        self.assertEqual(reloaded.total(), cart.total())

    def test_every_mutation_persists(self) -> None:
        storage = MemoryCartStorage()
        cart = CartStore(storage, key=KEY)
        cart.add_item(ONION, 1)
        self.assertIn(KEY, storage.data)
        cart.clear_cart()
        self.assertEqual(json.loads(storage.data[KEY]), {"items": []})

    def test_corrupted_state_starts_empty(self) -> None:
        storage = MemoryCartStorage()
        storage.save(KEY, "{not json")
        with self.assertLogs("utils.cart_store", level="WARNING"):
            cart = CartStore(storage, key=KEY)
        self.assertEqual(cart.items, [])

    def test_invalid_line_discards_snapshot(self) -> None:
        storage = MemoryCartStorage()
        storage.save(KEY, json.dumps({"items": [{"id": 1, "name": "Onion", "price_per_kg": 40, "qty": 0}]}))
        with self.assertLogs("utils.cart_store", level="WARNING"):
            cart = CartStore(storage, key=KEY)
        self.assertEqual(cart.items, [])

    def test_json_file_storage_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            storage = JsonFileCartStorage(Path(tmp) / "carts")
            cart = CartStore(storage, key=KEY)
            cart.add_item(ONION, 2)

            self.assertTrue((Path(tmp) / "carts" / f"{KEY}.json").exists())
            reloaded = CartStore(JsonFileCartStorage(Path(tmp) / "carts"), key=KEY)
            self.assertEqual([(line.id, line.qty) for line in reloaded.items], [(1, 2)])

    def test_default_key_from_config(self) -> None:
        storage = MemoryCartStorage()
        CartStore(storage).add_item(ONION, 1)
        self.assertEqual(list(storage.data), ["veg-wholesale-cart"])


def test_database_storage_round_trip(db_session):
    cart = CartStore(DatabaseCartStorage(db_session, "device-a"), key=KEY)
    cart.add_item(ONION, 2)

    assert [(line.id, line.qty) for line in CartStore(DatabaseCartStorage(db_session, "device-a")).items] == [(1, 2)]
    assert CartStore(DatabaseCartStorage(db_session, "device-b")).items == []


def test_database_read_failure_starts_empty(db_session, monkeypatch, caplog):
    def fail(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "query", fail)
    with caplog.at_level("ERROR", logger="utils.cart_store"):
        cart = CartStore(DatabaseCartStorage(db_session, "device-a"), key=KEY)

    assert cart.items == []
    assert any("Could not load cart" in r.getMessage() for r in caplog.records)
