from sqlalchemy import Column, String, JSON, DateTime, func
from database import Base

# Store-wide settings document; a single row with id "general".
# `data` keeps the camelCase keys the storefront frontend reads.
class SettingsDocument(Base):
    __tablename__ = "settings"

    id = Column(String, primary_key=True, default="general")
    data = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
