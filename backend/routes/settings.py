# backend/routes/settings.py
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models.settings import SettingsDocument
from models.users import User
from schemas.settings import StoreSettings, StoreSettingsUpdate
from utils.audit import write_log
from utils.settings_cache import SETTINGS_DOC_ID, SettingsCache, SettingsChannel
from utils.tokenJWT import admin_required

router = APIRouter(prefix="/settings", tags=["Settings"])


# The cache and channel are created once in main.py and live on app.state
def get_settings_cache(request: Request) -> SettingsCache:
    return request.app.state.settings_cache

def get_settings_channel(request: Request) -> SettingsChannel:
    return request.app.state.settings_channel


@router.get("", response_model=StoreSettings)
def read_settings(cache: SettingsCache = Depends(get_settings_cache)):
    return cache.get()


# Merge the changed fields into the stored document, then push them to the cache
@router.put("", response_model=StoreSettings)
def update_settings(
    payload: StoreSettingsUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
    cache: SettingsCache = Depends(get_settings_cache),
    channel: SettingsChannel = Depends(get_settings_channel),
):
    changes = payload.model_dump(exclude_unset=True, exclude_none=True, by_alias=True)

    try:
        doc = db.query(SettingsDocument).filter(SettingsDocument.id == SETTINGS_DOC_ID).first()
        if not doc:
            doc = SettingsDocument(id=SETTINGS_DOC_ID, data={})
            db.add(doc)
        # Reassign so SQLAlchemy notices the JSON change
        doc.data = {**(doc.data or {}), **changes}
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(status_code=503, detail=f"Failed to save settings: {e}")

    channel.publish(changes)

    write_log(
        db,
        user=current_user,
        action="SETTINGS_UPDATE",
        resource="settings",
        request=request,
        meta={"fields": sorted(changes.keys())},
    )
    return cache.get()
