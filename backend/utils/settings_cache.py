# backend/utils/settings_cache.py
"""Process-wide store settings and the channel that feeds them.

The cache starts from hardcoded defaults so prices and contact details
render before any stored settings arrive. Updates come in as partial
documents over a :class:`SettingsChannel`; failures on that channel are
logged and never reach the customer.
"""
import logging
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.settings import SettingsDocument
from schemas.settings import StoreSettings
from utils.errors import PermissionDeniedError, storefront_error_from_db

logger = logging.getLogger(__name__)

SETTINGS_DOC_ID = "general"

# camelCase document key -> field name
_FIELDS = {to_camel(name): name for name in StoreSettings.model_fields}
_FIELDS.update({name: name for name in StoreSettings.model_fields})


class SettingsCache:
    def __init__(self, initial: Optional[StoreSettings] = None):
        self._settings = initial or StoreSettings()

    def get(self) -> StoreSettings:
        return self._settings

    def apply_partial(self, update: Union[Mapping[str, Any], BaseModel]) -> StoreSettings:
        """Shallow-merge ``update`` over the current settings.

        Keys may be field names or their camelCase document spelling. Missing
        or null keys leave the current value alone; unknown keys are ignored.
        Values are not checked beyond type coercion, so an empty currency
        symbol is kept as-is.
        """
        if isinstance(update, BaseModel):
            update = update.model_dump(exclude_unset=True)

        changes = {}
        for key, value in update.items():
            name = _FIELDS.get(key)
            if name is not None and value is not None:
                changes[name] = value

        if not changes:
            return self._settings

        merged = {**self._settings.model_dump(), **changes}
        try:
            self._settings = StoreSettings.model_validate(merged)
        except ValidationError as e:
            logger.warning("Ignoring settings update with unusable values: %s", e)
        return self._settings


Subscriber = Tuple[Callable[[dict], Any], Optional[Callable[[Exception], Any]]]


class SettingsChannel:
    """In-process push channel for partial settings documents."""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, on_next, on_error=None) -> Callable[[], None]:
        entry = (on_next, on_error)
        self._subscribers.append(entry)

        def unsubscribe():
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    def publish(self, update: dict) -> None:
        for on_next, _ in list(self._subscribers):
            on_next(update)

    def publish_error(self, error: Exception) -> None:
        for _, on_error in list(self._subscribers):
            if on_error is not None:
                on_error(error)


def log_settings_error(error: Exception) -> None:
    # Public visitors must not see rule errors; defaults stay in place
    if isinstance(error, PermissionDeniedError):
        logger.warning("Settings: Permission denied. Using default local settings.")
    else:
        logger.error("Error fetching settings: %s", error)


def connect(cache: SettingsCache, channel: SettingsChannel) -> Callable[[], None]:
    return channel.subscribe(cache.apply_partial, log_settings_error)


def publish_stored_settings(db: Session, channel: SettingsChannel) -> None:
    """Push the stored settings document (if any) to the channel's subscribers."""
    try:
        doc = db.query(SettingsDocument).filter(SettingsDocument.id == SETTINGS_DOC_ID).first()
    except SQLAlchemyError as e:
        channel.publish_error(storefront_error_from_db(e))
        return
    if doc and doc.data:
        channel.publish(dict(doc.data))
