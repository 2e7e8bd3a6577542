from sqlalchemy import Column, Integer, String, DateTime, func
from database import Base

# Hero banner shown on the storefront home page, rotated in `order` sequence
class Banner(Base):
    __tablename__ = "banners"

    id = Column(Integer, primary_key=True, index=True)
    image_url = Column(String, nullable=False)
    title = Column(String, nullable=False, default="")
    subtitle = Column(String, nullable=False, default="")
    cta_url = Column(String, nullable=False, default="/")
    order = Column("display_order", Integer, nullable=False, default=0, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
