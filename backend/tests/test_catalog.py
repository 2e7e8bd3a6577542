# tests/test_catalog.py

"""Tests for the storefront catalog filter."""

import unittest

from schemas.product import ProductOut
from utils.catalog import filter_products


def _p(pid: int, name: str, price: float, category: str = "Vegetables") -> ProductOut:
    """Create a minimal catalog product."""
    return ProductOut(id=pid, name=name, slug=name.lower(), price_per_kg=price, category=category)


class TestFilterProducts(unittest.TestCase):
    """filter_products behaviour."""

    def setUp(self) -> None:
        self.products = [
            _p(1, "Red Onion", 40),
            _p(2, "Potato", 25),
            _p(3, "Kashmiri Red Chili", 350, "Spices"),
            _p(4, "Tomato", 25),
        ]

    def test_search_is_case_insensitive_substring(self) -> None:
        """'onion' matches 'Red Onion' only."""
        result = filter_products(self.products[:2], "onion", "All", "default")
        self.assertEqual([p.name for p in result], ["Red Onion"])

    def test_empty_search_and_all_keeps_input_order(self) -> None:
        result = filter_products(self.products, "", "All", "default")
        self.assertEqual([p.id for p in result], [1, 2, 3, 4])

    def test_category_with_price_ascending(self) -> None:
        """Only Vegetables, cheapest first, ties keep catalog order."""
        result = filter_products(self.products, "", "Vegetables", "price-asc")
        self.assertEqual([p.id for p in result], [2, 4, 1])

    def test_price_descending(self) -> None:
        result = filter_products(self.products, "", "All", "price-desc")
        self.assertEqual([p.id for p in result], [3, 1, 2, 4])

    def test_search_and_category_combine(self) -> None:
        """'red' hits two names, the category narrows to one."""
        result = filter_products(self.products, "RED", "Spices", "default")
        self.assertEqual([p.id for p in result], [3])

    def test_unknown_sort_key_keeps_order(self) -> None:
        result = filter_products(self.products, "", "All", "name")
        self.assertEqual([p.id for p in result], [1, 2, 3, 4])

    def test_no_match_returns_empty(self) -> None:
        self.assertEqual(filter_products(self.products, "mango", "All", "default"), [])
        self.assertEqual(filter_products(self.products, "", "Exotic", "default"), [])

    def test_empty_input(self) -> None:
        self.assertEqual(filter_products([], "onion", "All", "price-asc"), [])

    def test_input_not_mutated(self) -> None:
        filter_products(self.products, "", "All", "price-asc")
        self.assertEqual([p.id for p in self.products], [1, 2, 3, 4])
