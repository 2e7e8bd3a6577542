# backend/routes/banners.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from database import get_db
from models.banner import Banner
from models.users import User
from schemas.banner import BannerOut
from utils.audit import write_log
from utils.tokenJWT import admin_required
from utils.uploads import save_image

router = APIRouter(prefix="/banners", tags=["Banners"])

# Shown when no banner has been configured yet
DEFAULT_BANNER = BannerOut(
    id=0,
    image_url="https://images.unsplash.com/photo-1550989460-0adf9ea622e2?q=80&w=1000&auto=format&fit=crop",
    title="Fresh Vegetables",
    subtitle="Direct from Farm",
    cta_url="/",
    order=1,
)


def _get_or_404(db: Session, banner_id: int) -> Banner:
    banner = db.query(Banner).filter(Banner.id == banner_id).first()
    if not banner:
        raise HTTPException(status_code=404, detail="Banner not found")
    return banner


# Public carousel, in display order
@router.get("", response_model=List[BannerOut])
def list_banners(db: Session = Depends(get_db)):
    banners = db.query(Banner).order_by(Banner.order.asc(), Banner.id.asc()).all()
    return banners or [DEFAULT_BANNER]


@router.post("", response_model=BannerOut)
def create_banner(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
    file: Optional[UploadFile] = File(None),
    image_url: Optional[str] = Form(None),
    title: str = Form(""),
    subtitle: str = Form(""),
    cta_url: str = Form("/"),
    order: int = Form(0),
):
    if file:
        image_url = save_image(file, "banner")
    if not image_url:
        raise HTTPException(status_code=400, detail="Please select an image")

    banner = Banner(image_url=image_url, title=title, subtitle=subtitle, cta_url=cta_url, order=order)
    db.add(banner)
    db.commit()
    db.refresh(banner)

    write_log(db, user=current_user, action="BANNER_CREATE", resource="banners",
              request=request, meta={"banner_id": banner.id})
    return banner


@router.patch("/{banner_id}", response_model=BannerOut)
def update_banner(
    banner_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
    file: Optional[UploadFile] = File(None),
    image_url: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    subtitle: Optional[str] = Form(None),
    cta_url: Optional[str] = Form(None),
    order: Optional[int] = Form(None),
):
    banner = _get_or_404(db, banner_id)

    if file:
        banner.image_url = save_image(file, "banner")
    elif image_url:
        banner.image_url = image_url

    # Update fields if provided in the form
    if title is not None:
        banner.title = title
    if subtitle is not None:
        banner.subtitle = subtitle
    if cta_url is not None:
        banner.cta_url = cta_url
    if order is not None:
        banner.order = order

    db.commit()
    db.refresh(banner)

    write_log(db, user=current_user, action="BANNER_UPDATE", resource="banners",
              request=request, meta={"banner_id": banner.id})
    return banner


@router.delete("/{banner_id}")
def delete_banner(
    banner_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    banner = _get_or_404(db, banner_id)
    db.delete(banner)
    db.commit()

    write_log(db, user=current_user, action="BANNER_DELETE", resource="banners",
              request=request, meta={"banner_id": banner_id})
    return {"message": "Banner Deleted Successfully!", "id": banner_id}
