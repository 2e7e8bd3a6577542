# backend/utils/order_log.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.order import Order
from schemas.order import OrderRecord
from utils.errors import storefront_error_from_db

logger = logging.getLogger(__name__)


def append_order(db: Session, record: OrderRecord) -> int:
    """Insert ``record`` into the orders log and return its id.

    Database errors are translated to storefront errors so checkout can
    tell a refused write from an unavailable database.
    """
    order = Order(
        customer_name=record.customer_name,
        customer_phone=record.customer_phone,
        customer_address=record.customer_address,
        items=[line.model_dump() for line in record.items],
        total_amount=record.total_amount,
        whatsapp_message=record.whatsapp_message,
        status=record.status,
        platform=record.platform,
        created_at=record.created_at,
    )
    try:
        db.add(order)
        db.commit()
        db.refresh(order)
    except SQLAlchemyError as e:
        db.rollback()
        raise storefront_error_from_db(e) from e

    logger.info("Logged order %s (%d lines, total %s)", order.id, len(record.items), record.total_amount)
    return order.id
