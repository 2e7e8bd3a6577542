# backend/routes/content.py
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from database import get_db
from models.content import ContentPage
from models.users import User
from schemas.content import PAGE_TITLES, ContentOut, ContentUpdate
from utils.audit import write_log
from utils.tokenJWT import admin_required

router = APIRouter(prefix="/content", tags=["Content"])


def _check_page(page_id: str):
    if page_id not in PAGE_TITLES:
        raise HTTPException(status_code=404, detail="Unknown page")


# Public page body; never-saved pages come back empty
@router.get("/{page_id}", response_model=ContentOut)
def get_content(page_id: str, db: Session = Depends(get_db)):
    _check_page(page_id)
    page = db.query(ContentPage).filter(ContentPage.page_id == page_id).first()
    return ContentOut(
        page_id=page_id,
        title=PAGE_TITLES[page_id],
        html=page.html if page else "",
        updated_at=page.updated_at if page else None,
    )


@router.put("/{page_id}", response_model=ContentOut)
def save_content(
    page_id: str,
    payload: ContentUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    _check_page(page_id)
    page = db.query(ContentPage).filter(ContentPage.page_id == page_id).first()
    if not page:
        page = ContentPage(page_id=page_id)
        db.add(page)
    page.html = payload.html
    db.commit()
    db.refresh(page)

    write_log(db, user=current_user, action="CONTENT_UPDATE", resource="content",
              request=request, meta={"page_id": page_id, "length": len(payload.html)})

    return ContentOut(page_id=page_id, title=PAGE_TITLES[page_id], html=page.html, updated_at=page.updated_at)
