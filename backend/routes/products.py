# backend/routes/products.py
from typing import Optional, List
from fastapi import (
    APIRouter, Depends, HTTPException, Query, Request,
    UploadFile, File, Form
)
from sqlalchemy.orm import Session

from database import get_db
from utils.tokenJWT import admin_required
from utils.audit import write_log
from utils.sample_data import seed_sample_products, slugify
from utils.uploads import save_image
from models.users import User
from models.product import Product
import schemas.product as product_schemas

router = APIRouter(prefix="/products", tags=["Products"])


def _get_or_404(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# LISTA PRODUKTÓW
# =========================
@router.get("", response_model=product_schemas.ProductListPage)
def list_products(
    name: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    in_stock: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    sort_by: str = Query("created_at"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    query = db.query(Product)

    if name: query = query.filter(Product.name.ilike(f"%{name}%"))
    if category: query = query.filter(Product.category == category)
    if in_stock is not None: query = query.filter(Product.in_stock == in_stock)

    allowed = {
        "id": Product.id, "name": Product.name, "price_per_kg": Product.price_per_kg,
        "stock_quantity": Product.stock_quantity, "created_at": Product.created_at,
    }
    sort_col = allowed.get(sort_by.lower(), Product.created_at)
    query = query.order_by(sort_col.asc() if order == "asc" else sort_col.desc(), Product.id.desc())

    total = query.count()
    items: List[Product] = query.offset((page - 1) * page_size).limit(page_size).all()

    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{product_id}", response_model=product_schemas.ProductOut)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    return _get_or_404(db, product_id)


# =========================
# DODAWANIE PRODUKTU
# =========================
@router.post("", response_model=product_schemas.ProductOut)
def add_product(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
    file: Optional[UploadFile] = File(None),
    name: str = Form(...),
    price_per_kg: float = Form(..., ge=0),
    unit: str = Form("kg"),
    category: str = Form("Vegetables"),
    description: str = Form(""),
    featured: bool = Form(False),
    in_stock: bool = Form(True),
    stock_quantity: int = Form(100, ge=0),
    low_stock_threshold: int = Form(10, ge=0),
    image_url: Optional[str] = Form(None),
):
    images = [image_url] if image_url else []
    if file:
        images = [save_image(file, "product")]

    product = Product(
        name=name, slug=slugify(name), price_per_kg=price_per_kg, unit=unit,
        category=category, description=description, images=images,
        featured=featured, in_stock=in_stock, stock_quantity=stock_quantity,
        low_stock_threshold=low_stock_threshold,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    write_log(db, user=current_user, action="PRODUCT_CREATE", resource="products",
              request=request, meta={"product_id": product.id, "name": product.name})
    return product


# =========================
# EDYCJA PRODUKTU
# =========================
@router.patch("/{product_id}", response_model=product_schemas.ProductOut)
def update_product(
    product_id: int,
    payload: product_schemas.ProductEditRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    product = _get_or_404(db, product_id)

    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(product, field, value)
    if "name" in changes:
        product.slug = slugify(product.name)

    db.commit()
    db.refresh(product)

    write_log(db, user=current_user, action="PRODUCT_UPDATE", resource="products",
              request=request, meta={"product_id": product.id, "fields": sorted(changes.keys())})
    return product


@router.post("/{product_id}/image", response_model=product_schemas.ProductOut)
def upload_product_image(
    product_id: int,
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    product = _get_or_404(db, product_id)
    product.images = [save_image(file, "product")]
    db.commit()
    db.refresh(product)

    write_log(db, user=current_user, action="PRODUCT_IMAGE", resource="products",
              request=request, meta={"product_id": product.id})
    return product


@router.patch("/{product_id}/toggle-stock", response_model=product_schemas.ProductOut)
def toggle_stock(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    product = _get_or_404(db, product_id)
    product.in_stock = not product.in_stock
    db.commit()
    db.refresh(product)

    write_log(db, user=current_user, action="PRODUCT_STOCK", resource="products",
              request=request, meta={"product_id": product.id, "in_stock": product.in_stock})
    return product


# =========================
# USUWANIE
# =========================
@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    product = _get_or_404(db, product_id)
    db.delete(product)
    db.commit()

    write_log(db, user=current_user, action="PRODUCT_DELETE", resource="products",
              request=request, meta={"product_id": product_id})
    return {"message": "Product deleted successfully!", "id": product_id}


@router.post("/bulk-delete")
def bulk_delete_products(
    payload: product_schemas.ProductIdList,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    deleted = 0
    if payload.ids:
        deleted = db.query(Product).filter(Product.id.in_(payload.ids)).delete(synchronize_session=False)
        db.commit()

    write_log(db, user=current_user, action="PRODUCT_BULK_DELETE", resource="products",
              request=request, meta={"ids": payload.ids, "deleted": deleted})
    return {"message": f"Deleted {deleted} products", "deleted": deleted}


@router.post("/seed", response_model=List[product_schemas.ProductOut])
def import_sample_products(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    created = seed_sample_products(db)
    for product in created:
        db.refresh(product)

    write_log(db, user=current_user, action="PRODUCT_SEED", resource="products",
              request=request, meta={"created": len(created)})
    return created
