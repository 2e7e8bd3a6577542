from datetime import datetime
from typing import Optional

from pydantic import BaseModel

# Pages editable from the content manager
PAGE_TITLES = {
    "about": "About Us",
    "terms": "Terms & Conditions",
    "privacy": "Privacy Policy",
}


class ContentOut(BaseModel):
    page_id: str
    title: str
    html: str
    updated_at: Optional[datetime] = None


class ContentUpdate(BaseModel):
    html: str
