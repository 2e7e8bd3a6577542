# backend/utils/catalog.py
from typing import Iterable, List, TypeVar

# Selector values offered by the storefront
CATEGORIES = ["All", "Vegetables", "Fruits", "Spices", "Exotic"]
SORT_KEYS = ["default", "price-asc", "price-desc"]

P = TypeVar("P")


def filter_products(
    products: Iterable[P],
    search_term: str = "",
    category: str = "All",
    sort_key: str = "default",
) -> List[P]:
    """Narrow a product list by name search and category, then sort by price.

    Works on anything exposing ``name``, ``category`` and ``price_per_kg``
    (ORM rows or ProductOut schemas). Unknown sort keys keep input order.
    """
    needle = (search_term or "").lower()

    matched = [
        p for p in products
        if needle in (p.name or "").lower()
        and (category == "All" or p.category == category)
    ]

    # sorted() is stable, equal prices keep their catalog order
    if sort_key == "price-asc":
        return sorted(matched, key=lambda p: p.price_per_kg)
    if sort_key == "price-desc":
        return sorted(matched, key=lambda p: p.price_per_kg, reverse=True)
    return matched
