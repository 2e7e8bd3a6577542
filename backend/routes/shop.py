from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
from schemas.product import ProductOut
from utils.catalog import CATEGORIES, SORT_KEYS, filter_products

router = APIRouter(prefix="/shop", tags=["Shop"])


# Category selector values (always starts with "All")
@router.get("/categories", response_model=List[str])
def get_categories():
    return CATEGORIES


@router.get("/products", response_model=List[ProductOut])
def list_products_for_shop(
    q: str = Query("", description="Search by product name"),
    category: str = Query("All", description="Category or All"),
    sort: str = Query("default", description=f"One of {', '.join(SORT_KEYS)}"),
    db: Session = Depends(get_db),
):
    # Catalog is small; filter and sort in memory the same way the storefront does
    products = db.query(Product).order_by(Product.id.asc()).all()
    return filter_products(products, q, category, sort)


@router.get("/products/{product_id}", response_model=ProductOut)
def get_shop_product(product_id: int, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

