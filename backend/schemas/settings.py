from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

STORE_NAME = "akWholesale"
CURRENCY = "₹"
WHATSAPP_NUMBER = "917505067414"
STORE_ADDRESS = "123 Market Yard, Main Road, Vegetable City, India 400001"


# Settings documents are stored with camelCase keys; both spellings are accepted
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FooterLink(CamelModel):
    name: str
    path: str


def _default_links() -> List[FooterLink]:
    return [
        FooterLink(name="Home", path="/"),
        FooterLink(name="About Us", path="/about"),
        FooterLink(name="Terms & Conditions", path="/terms"),
        FooterLink(name="Privacy Policy", path="/privacy"),
        FooterLink(name="Admin Login", path="/admin/login"),
    ]


def _default_copyright() -> str:
    return f"© {datetime.now().year} {STORE_NAME}. All rights reserved."


class FooterSettings(CamelModel):
    about_text: str = (
        "Providing fresh, organic, and locally sourced vegetables "
        "directly to wholesalers and restaurants."
    )
    copyright_text: str = Field(default_factory=_default_copyright)
    bg_color: str = "#111827"
    text_color: str = "#ffffff"
    quick_links: List[FooterLink] = Field(default_factory=_default_links)


class StoreSettings(CamelModel):
    store_name: str = STORE_NAME
    logo_url: str = ""
    whatsapp_number: str = WHATSAPP_NUMBER
    currency_symbol: str = CURRENCY
    tax_rate: float = 0
    address: str = STORE_ADDRESS
    footer: FooterSettings = Field(default_factory=FooterSettings)


# Body of PUT /settings: any subset of the top-level fields
class StoreSettingsUpdate(CamelModel):
    store_name: Optional[str] = None
    logo_url: Optional[str] = None
    whatsapp_number: Optional[str] = None
    currency_symbol: Optional[str] = None
    tax_rate: Optional[float] = None
    address: Optional[str] = None
    footer: Optional[FooterSettings] = None
