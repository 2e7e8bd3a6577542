# backend/utils/checkout.py
"""WhatsApp checkout: build the order message, log it, hand off, empty the cart."""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, NamedTuple, Optional

from schemas.order import CustomerDetails, OrderRecord
from schemas.settings import StoreSettings
from utils.cart_store import CartStore
from utils.errors import EmptyCartError, PermissionDeniedError, StorefrontError
from utils.order_message import build_order_message

logger = logging.getLogger(__name__)

NOTICE_LOGGED = "Order logged! Opening WhatsApp..."
NOTICE_OPENING = "Opening WhatsApp..."
NOTICE_NOT_LOGGED = "Could not log order, but proceeding to WhatsApp."


class CheckoutResult(NamedTuple):
    order_ref: Any
    message: str
    deep_link: str
    notice: str


def make_order_record(cart: CartStore, customer: CustomerDetails, message: str, created_at: datetime) -> OrderRecord:
    return OrderRecord(
        customer_name=(customer.name or "").strip() or "Anonymous",
        customer_phone=customer.phone or "",
        customer_address=customer.address or "",
        items=cart.items,
        total_amount=cart.total(),
        whatsapp_message=message,
        created_at=created_at,
    )


def place_order(
    cart: CartStore,
    store: StoreSettings,
    customer: CustomerDetails,
    append_order: Callable[[OrderRecord], Any],
    dispatch: Callable[[str], Any],
    placed_at: Optional[str] = None,
    now: Optional[datetime] = None,
) -> CheckoutResult:
    """Run one checkout against ``cart``.

    ``append_order`` receives the immutable record and may fail; the failure
    is logged and the handoff still happens, because the chat message is the
    order of record. ``dispatch`` gets the deep link; a cart that cannot be
    cleared afterwards is logged and does not undo the handoff.
    """
    if not cart.items:
        raise EmptyCartError()

    message = build_order_message(cart.items, cart.total(), customer, store, placed_at=placed_at)
    record = make_order_record(cart, customer, message.text, now or datetime.now(timezone.utc))

    order_ref = None
    try:
        order_ref = append_order(record)
        notice = NOTICE_LOGGED
    except PermissionDeniedError:
        logger.warning("Order log permission denied, handing off to WhatsApp without a record")
        notice = NOTICE_OPENING
    except Exception:
        logger.exception("Error logging order")
        notice = NOTICE_NOT_LOGGED

    dispatch(message.deep_link)
    try:
        cart.clear_cart()
    except StorefrontError as e:
        logger.warning("Order handed off but the cart could not be cleared: %s", e)

    return CheckoutResult(order_ref=order_ref, message=message.text, deep_link=message.deep_link, notice=notice)
