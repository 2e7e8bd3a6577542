from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BannerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    image_url: str
    title: str
    subtitle: str
    cta_url: str
    order: int
    created_at: Optional[datetime] = None
