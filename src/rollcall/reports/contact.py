"""Parent contact shortcuts (``tel:`` / ``sms:`` links) for absentee rows."""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from ..core.exceptions import ValidationError

SMS_TEMPLATE = (
    "Hello, this is regarding {student_name}'s attendance. "
    "Please contact the school for more information."
)

# Characters left alone by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _require_phone(phone: Optional[str]) -> str:
    if not phone or not phone.strip():
        raise ValidationError("Parent phone number is missing")
    return phone.strip()


def tel_link(phone: Optional[str]) -> str:
    return f"tel:{_require_phone(phone)}"


def sms_link(phone: Optional[str], student_name: str) -> str:
    body = quote(SMS_TEMPLATE.format(student_name=student_name), safe=_URI_COMPONENT_SAFE)
    return f"sms:{_require_phone(phone)}?body={body}"


def contact_links(phone: Optional[str], student_name: str) -> Optional[dict]:
    """Both links for a row, or None when the parent has no phone on file."""
    if not phone or not phone.strip():
        return None
    return {"call": tel_link(phone), "sms": sms_link(phone, student_name)}
