# backend/routes/cart.py
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
from routes.settings import get_settings_cache
from schemas.cart import CartAddItem, CartUpdateItem, CartOut, CartItemOut
from schemas.order import CheckoutResponse, CustomerDetails
from utils.cart_store import CartStore, DatabaseCartStorage
from utils.checkout import place_order
from utils.errors import EmptyCartError
from utils.order_log import append_order
from utils.settings_cache import SettingsCache

router = APIRouter(prefix="/cart", tags=["Cart"])
logger = logging.getLogger(__name__)


# Carts are per browsing device; the frontend sends a random id it keeps locally
def get_cart_store(
    x_cart_session: str = Header(default="anonymous"),
    db: Session = Depends(get_db),
) -> CartStore:
    return CartStore(DatabaseCartStorage(db, x_cart_session))


def _cart_to_out(cart: CartStore) -> CartOut:
    items_out = [
        CartItemOut(
            id=line.id,
            name=line.name,
            unit=line.unit,
            qty=line.qty,
            unit_price=line.price_per_kg,
            line_total=round(line.line_total, 2),
            image_url=line.images[0] if line.images else None,
        )
        for line in cart.items
    ]
    return CartOut(items=items_out, item_count=cart.item_count(), total=round(cart.total(), 2))


@router.get("", response_model=CartOut)
def get_cart(cart: CartStore = Depends(get_cart_store)):
    return _cart_to_out(cart)


@router.post("/add", response_model=CartOut, status_code=status.HTTP_200_OK)
def add_to_cart(
    payload: CartAddItem,
    db: Session = Depends(get_db),
    cart: CartStore = Depends(get_cart_store),
):
    product = db.query(Product).filter(Product.id == payload.product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    if not product.in_stock:
        raise HTTPException(status_code=400, detail=f"{product.name} is sold out")

    # Line keeps the price of this moment, later catalog edits do not apply
    cart.add_item(product, payload.qty)
    return _cart_to_out(cart)


@router.put("/items/{product_id}", response_model=CartOut)
def update_cart_item(
    product_id: int,
    payload: CartUpdateItem,
    cart: CartStore = Depends(get_cart_store),
):
    # qty <= 0 drops the line
    cart.update_qty(product_id, payload.qty)
    return _cart_to_out(cart)


@router.delete("/items/{product_id}", response_model=CartOut)
def delete_cart_item(
    product_id: int,
    cart: CartStore = Depends(get_cart_store),
):
    cart.remove_item(product_id)
    return _cart_to_out(cart)


@router.delete("", response_model=CartOut)
def clear_cart(cart: CartStore = Depends(get_cart_store)):
    cart.clear_cart()
    return _cart_to_out(cart)


@router.post("/checkout", response_model=CheckoutResponse)
def checkout(
    payload: CustomerDetails,
    db: Session = Depends(get_db),
    cart: CartStore = Depends(get_cart_store),
    cache: SettingsCache = Depends(get_settings_cache),
):
    # The browser opens the link; here dispatch just captures it for the response
    dispatched = []
    try:
        result = place_order(
            cart,
            cache.get(),
            payload,
            append_order=lambda record: append_order(db, record),
            dispatch=dispatched.append,
            now=datetime.now(),
        )
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=e.message)

    logger.info("Checkout handed off order %s: %s", result.order_ref, result.notice)

    return CheckoutResponse(
        order_id=result.order_ref,
        message=result.message,
        whatsapp_url=dispatched[0],
        notice=result.notice,
    )
