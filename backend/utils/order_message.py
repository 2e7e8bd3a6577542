# backend/utils/order_message.py
"""Formatting of the WhatsApp order message sent at checkout."""
from typing import NamedTuple, Optional, Sequence
from urllib.parse import quote

from config import settings as app_settings
from schemas.cart import CartLine
from schemas.order import CustomerDetails
from schemas.settings import StoreSettings

NOT_PROVIDED = "Not Provided"
SEPARATOR = "---------------------------"

# Characters encodeURIComponent leaves alone (alphanumerics and -_.~ are always safe for quote)
_URI_COMPONENT_SAFE = "!*'()"


class OrderMessage(NamedTuple):
    text: str
    deep_link: str


def format_amount(value: float) -> str:
    """Render money the way the storefront shows it: ``30``, ``12.5``, ``7.25``."""
    amount = round(float(value), 2)
    if amount.is_integer():
        return str(int(amount))
    return f"{amount:.2f}".rstrip("0").rstrip(".")


def build_whatsapp_link(number: str, text: str, base_url: Optional[str] = None) -> str:
    base = (base_url or app_settings.WHATSAPP_BASE_URL).rstrip("/")
    return f"{base}/{number}?text={quote(text, safe=_URI_COMPONENT_SAFE)}"


def _or_placeholder(value: Optional[str]) -> str:
    return value.strip() if value and value.strip() else NOT_PROVIDED


def format_line(position: int, line: CartLine, currency: str) -> str:
    return (
        f"{position}) {line.name} - {line.qty} {line.unit} - "
        f"{currency}{format_amount(line.price_per_kg)}/{line.unit} - "
        f"{currency}{format_amount(line.price_per_kg * line.qty)}"
    )


def build_order_message(
    lines: Sequence[CartLine],
    total: float,
    customer: CustomerDetails,
    store: StoreSettings,
    placed_at: Optional[str] = None,
) -> OrderMessage:
    """Build the order text and the wa.me link that carries it.

    ``placed_at`` is optional date text chosen by the caller; nothing here
    reads the clock, so identical inputs give identical output.
    """
    currency = store.currency_symbol
    item_list = "\n".join(
        format_line(idx, line, currency) for idx, line in enumerate(lines, start=1)
    )

    parts = [
        f"*New Order from {store.store_name}* 🥦",
        SEPARATOR,
        f"*Customer:* {_or_placeholder(customer.name)}",
        f"*Phone:* {_or_placeholder(customer.phone)}",
        f"*Address:* {_or_placeholder(customer.address)}",
    ]
    if placed_at:
        parts.append(f"*Date:* {placed_at}")
    parts += [
        SEPARATOR,
        "*Order Details:*",
        item_list,
        SEPARATOR,
        f"*Total: {currency}{format_amount(total)}*",
        SEPARATOR,
        "Payment: Cash on Delivery / Online (To be confirmed)",
        "Please confirm my order.",
    ]
    text = "\n".join(parts)

    return OrderMessage(text=text, deep_link=build_whatsapp_link(store.whatsapp_number, text))
