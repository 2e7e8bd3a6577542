# backend/schemas/product.py
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Shared base attributes for product entities
class ProductBase(ORMBase):
    name: str
    price_per_kg: float = Field(ge=0)
    unit: str = "kg"
    description: str = ""
    category: str = "Vegetables"
    images: List[str] = Field(default_factory=list)
    featured: bool = False
    in_stock: bool = True
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    low_stock_threshold: Optional[int] = Field(default=None, ge=0)


# Schema for creating a product from JSON (seed data, imports)
class ProductCreate(ProductBase):
    pass


# Schema for partial product updates
class ProductEditRequest(ORMBase):
    """Schema for PATCH requests - all fields optional."""
    name: Optional[str] = None
    price_per_kg: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    images: Optional[List[str]] = None
    featured: Optional[bool] = None
    in_stock: Optional[bool] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0)


# Full product representation as the storefront sees it
class ProductOut(ProductBase):
    id: int
    slug: str
    created_at: Optional[datetime] = None


class ProductIdList(BaseModel):
    ids: List[int]


# Paginated response for admin product listings
class ProductListPage(ORMBase):
    items: List[ProductOut]
    total: int
    page: int
    page_size: int
