from sqlalchemy import Column, String, Text, DateTime, func
from database import Base

# Editable static page (about, terms, privacy) stored as raw HTML
class ContentPage(Base):
    __tablename__ = "content_pages"

    page_id = Column(String, primary_key=True)
    html = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
