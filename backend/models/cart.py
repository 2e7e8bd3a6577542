# backend/models/cart.py
from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint, func
from database import Base

# Serialized cart state of one browsing device.
# The payload is opaque to the database; only utils.cart_store reads it.
class CartSnapshot(Base):
    __tablename__ = "cart_snapshots" # Table name

    id = Column(Integer, primary_key=True, index=True)
    device_id = Column(String, nullable=False, index=True) # Value of the X-Cart-Session header
    storage_key = Column(String, nullable=False) # Fixed storage namespace
    payload = Column(Text, nullable=False) # JSON snapshot of cart lines
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        # One snapshot per device and namespace
        UniqueConstraint("device_id", "storage_key", name="uq_cartsnapshot_device_key"),
    )
