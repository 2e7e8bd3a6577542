# backend/utils/cart_store.py
"""Shopping cart state with durable persistence.

The cart is owned by :class:`CartStore`; every mutation goes through it and
is written back to a :class:`CartStorage` under one fixed key, so the cart
survives restarts and page reloads. Prices are snapshotted when a product is
added and never re-read from the catalog.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import settings
from models.cart import CartSnapshot
from schemas.cart import CartLine, CartSnapshotPayload
from utils.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)


class CartStorage(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, payload: str) -> None: ...


class MemoryCartStorage:
    """Dict-backed storage, for tests and one-off scripts."""

    def __init__(self):
        self.data: Dict[str, str] = {}

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, payload: str) -> None:
        self.data[key] = payload


class JsonFileCartStorage:
    """Keeps each key as ``<directory>/<key>.json``."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, payload: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(payload, encoding="utf-8")


class DatabaseCartStorage:
    """Stores snapshots in ``cart_snapshots``, one row per device and key."""

    def __init__(self, db: Session, device_id: str):
        self.db = db
        self.device_id = device_id

    def _row(self, key: str) -> Optional[CartSnapshot]:
        return self.db.query(CartSnapshot).filter(
            CartSnapshot.device_id == self.device_id,
            CartSnapshot.storage_key == key,
        ).first()

    def load(self, key: str) -> Optional[str]:
        try:
            row = self._row(key)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Could not load cart for device %s: %s", self.device_id, e)
            return None
        return row.payload if row else None

    def save(self, key: str, payload: str) -> None:
        try:
            row = self._row(key)
            if row:
                row.payload = payload
            else:
                self.db.add(CartSnapshot(device_id=self.device_id, storage_key=key, payload=payload))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Could not persist cart for device %s: %s", self.device_id, e)
            raise ServiceUnavailableError("Could not save your cart. Please try again.") from e


class CartStore:
    def __init__(self, storage: CartStorage, key: Optional[str] = None):
        self.storage = storage
        self.key = key or settings.CART_STORAGE_KEY
        self._items: List[CartLine] = self._restore()

    def _restore(self) -> List[CartLine]:
        raw = self.storage.load(self.key)
        if not raw:
            return []
        try:
            return list(CartSnapshotPayload.model_validate_json(raw).items)
        except ValidationError:
            # Unreadable snapshot: start over with an empty cart
            logger.warning("Discarding corrupted cart state under key %r", self.key)
            return []

    def _persist(self) -> None:
        payload = CartSnapshotPayload(items=self._items).model_dump_json()
        self.storage.save(self.key, payload)

    @property
    def items(self) -> List[CartLine]:
        return list(self._items)

    def get(self, product_id: int) -> Optional[CartLine]:
        return next((line for line in self._items if line.id == product_id), None)

    def add_item(self, product, qty: int = 1) -> None:
        """Add ``qty`` of ``product``; an existing line for it is incremented.

        A non-positive ``qty`` adds nothing.
        """
        if qty < 1:
            logger.debug("Ignoring add of %s with qty %s", product.id, qty)
            return

        existing = self.get(product.id)
        if existing:
            self._items = [
                line.model_copy(update={"qty": line.qty + qty}) if line.id == product.id else line
                for line in self._items
            ]
        else:
            self._items = self._items + [CartLine(
                id=product.id,
                name=product.name,
                slug=getattr(product, "slug", "") or "",
                price_per_kg=product.price_per_kg,
                unit=getattr(product, "unit", None) or "kg",
                category=getattr(product, "category", None) or "",
                images=list(getattr(product, "images", None) or []),
                qty=qty,
            )]
        self._persist()

    def remove_item(self, product_id: int) -> None:
        self._items = [line for line in self._items if line.id != product_id]
        self._persist()

    def update_qty(self, product_id: int, qty: int) -> None:
        if qty <= 0:
            self.remove_item(product_id)
            return
        self._items = [
            line.model_copy(update={"qty": qty}) if line.id == product_id else line
            for line in self._items
        ]
        self._persist()

    def clear_cart(self) -> None:
        self._items = []
        self._persist()

    def total(self) -> float:
        return sum(line.price_per_kg * line.qty for line in self._items)

    def item_count(self) -> int:
        return sum(line.qty for line in self._items)
