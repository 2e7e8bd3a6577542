from sqlalchemy import Column, Integer, String, Float, DateTime, JSON, Text, func
from database import Base

# Log entry for a checkout handed off to WhatsApp.
# Items are a JSON snapshot of the cart lines, never updated after insert.
class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    customer_name = Column(String, nullable=False, default="Anonymous", index=True)
    customer_phone = Column(String, nullable=False, default="", index=True)
    customer_address = Column(String, nullable=False, default="")

    items = Column(JSON, nullable=False, default=list)
    total_amount = Column(Float, nullable=False)
    whatsapp_message = Column(Text, nullable=False)

    status = Column(String, nullable=False, default="new")
    platform = Column(String, nullable=True, default="web")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
