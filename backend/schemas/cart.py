from pydantic import BaseModel, Field
from typing import List, Optional


# Single cart line: product display fields captured at add time plus quantity
class CartLine(BaseModel):
    id: int
    name: str
    slug: str = ""
    price_per_kg: float
    unit: str = "kg"
    category: str = ""
    images: List[str] = Field(default_factory=list)
    qty: int = Field(ge=1)

    @property
    def line_total(self) -> float:
        return self.price_per_kg * self.qty


# Persisted form of a cart (what CartStorage keeps under the storage key)
class CartSnapshotPayload(BaseModel):
    items: List[CartLine] = Field(default_factory=list)


# Request schema for adding an item to the cart
class CartAddItem(BaseModel):
    product_id: int
    qty: int = Field(default=1, ge=1)

# Request schema for setting a line's quantity; <= 0 removes the line
class CartUpdateItem(BaseModel):
    qty: int

# Response schema for a single cart line
class CartItemOut(BaseModel):
    id: int
    name: str
    unit: str
    qty: int
    unit_price: float
    line_total: float
    image_url: Optional[str] = None

# Response schema for the entire cart summary
class CartOut(BaseModel):
    items: List[CartItemOut]
    item_count: int
    total: float
