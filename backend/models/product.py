# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, JSON, CheckConstraint, func
from database import Base

# Represents a single catalog product sold by weight or piece.
# Prices are per unit (usually kg); images hold public URLs, first one is the cover.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    slug = Column(String, nullable=False, index=True)

    description = Column(String, default="")
    category = Column(String, default="Vegetables", index=True)

    # Unit price, kept non-negative by constraint
    price_per_kg = Column(Float, CheckConstraint("price_per_kg >= 0"), nullable=False)
    unit = Column(String, nullable=False, default="kg")

    images = Column(JSON, nullable=False, default=list)
    featured = Column(Boolean, nullable=False, default=False)

    # Availability and inventory alerting
    in_stock = Column(Boolean, nullable=False, default=True)
    stock_quantity = Column(Integer, nullable=True)
    low_stock_threshold = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
