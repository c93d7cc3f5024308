import re
from typing import Optional
from urllib.parse import quote

from . import settings
from .schemas import InventoryItem

# Characters encodeURIComponent leaves untouched.
_URI_SAFE = "-_.!~*'()"


def can_contact_supplier(item: InventoryItem) -> bool:
    return bool(item.supplier_whatsapp and item.supplier_whatsapp.strip())


def clean_phone_number(raw: str) -> str:
    """Keeps only digits and '+', e.g. '+62 812-3456' -> '+628123456'."""
    return re.sub(r"[^0-9+]", "", raw)


def _format_quantity(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def build_reorder_message(item: InventoryItem) -> str:
    return settings.WHATSAPP_MESSAGE_TEMPLATE.format(
        name=item.name,
        current_stock=_format_quantity(item.current_stock),
        unit=item.unit,
    )


def build_whatsapp_link(item: InventoryItem) -> Optional[str]:
    """Pre-filled WhatsApp reorder link for the item's supplier, or None without a number."""
    if not can_contact_supplier(item):
        return None
    phone = clean_phone_number(item.supplier_whatsapp)
    message = quote(build_reorder_message(item), safe=_URI_SAFE)
    return f"{settings.WHATSAPP_BASE_URL}{phone}?text={message}"
