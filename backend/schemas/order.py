from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from schemas.cart import CartLine


# Contact details typed into the checkout form; every field is optional
class CustomerDetails(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


# Immutable snapshot handed to the order log after a checkout
class OrderRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer_name: str
    customer_phone: str
    customer_address: str
    items: List[CartLine]
    total_amount: float
    whatsapp_message: str
    created_at: datetime
    status: str = "new"
    platform: str = "web"


# Result of POST /cart/checkout
class CheckoutResponse(BaseModel):
    order_id: Optional[int] = None
    message: str
    whatsapp_url: str
    notice: str


# Output schema representing a logged order
class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_name: str
    customer_phone: str
    customer_address: str
    items: List[CartLine] = Field(default_factory=list)
    total_amount: float
    whatsapp_message: str
    status: str
    platform: Optional[str] = None
    created_at: Optional[datetime] = None


# Schema for paginated order lists
class OrdersPage(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int


class WhatsAppLink(BaseModel):
    whatsapp_url: str
