# backend/routes/orders.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from database import get_db
from models.order import Order
from models.users import User
from routes.settings import get_settings_cache
from schemas.order import OrderResponse, OrdersPage, WhatsAppLink
from utils.audit import write_log
from utils.order_message import build_whatsapp_link
from utils.settings_cache import SettingsCache
from utils.tokenJWT import admin_required

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger(__name__)


def _get_or_404(db: Session, order_id: int) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


# Order log, newest first; q matches customer name or phone
@router.get("", response_model=OrdersPage)
def list_orders(
    q: Optional[str] = Query(None, description="Search by customer name or phone"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    query = db.query(Order)
    if q:
        query = query.filter(or_(
            Order.customer_name.ilike(f"%{q}%"),
            Order.customer_phone.contains(q),
        ))
    query = query.order_by(Order.created_at.desc(), Order.id.desc())

    total = query.count()
    orders = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": orders, "total": total, "page": page, "page_size": page_size}


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    return _get_or_404(db, order_id)


# Re-open the stored message in WhatsApp, addressed to the store's current number
@router.get("/{order_id}/whatsapp", response_model=WhatsAppLink)
def get_order_whatsapp_link(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
    cache: SettingsCache = Depends(get_settings_cache),
):
    order = _get_or_404(db, order_id)
    if not order.whatsapp_message:
        raise HTTPException(status_code=400, detail="No message content stored.")
    return WhatsAppLink(whatsapp_url=build_whatsapp_link(cache.get().whatsapp_number, order.whatsapp_message))


@router.delete("/{order_id}")
def delete_order(
    order_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    order = _get_or_404(db, order_id)
    db.delete(order)
    db.commit()

    write_log(db, user=current_user, action="ORDER_DELETE", resource="orders",
              request=request, meta={"order_id": order_id})
    logger.info("Order %s deleted by %s", order_id, current_user.email)
    return {"message": "Order deleted successfully", "id": order_id}
