"""
Fonctions de formatage des messages envoyes aux clients.

- format_phone_number : numero international pour wa.me
- format_currency : montant en roupies (Rp 1.250.000)
- format_date : date longue anglaise (January 5, 2027)
- generate_voucher_message / generate_whatsapp_url : message WhatsApp du voucher
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union
from urllib.parse import quote

from kalanara.utils.constants import (
    DEFAULT_COUNTRY_CODE,
    MONTH_NAMES,
    SPA_ADDRESS,
    SPA_EMAIL,
    SPA_NAME,
    SPA_PHONE,
    SPA_TAGLINE,
)

_NON_PHONE_CHARS = re.compile(r"[^\d+]")
_SEPARATOR = "━" * 18


@dataclass(frozen=True)
class WhatsAppVoucherData:
    """Donnees necessaires au message WhatsApp d'un voucher."""

    recipient_phone: str
    recipient_name: str
    sender_name: str
    voucher_code: str
    service_name: str
    service_duration: int
    amount: int
    expiry_date: Union[date, datetime, str]
    verify_url: str
    sender_message: Optional[str] = None


def format_phone_number(phone: str) -> str:
    """
    Normalise un numero de telephone pour wa.me.

    Retire tout sauf les chiffres et '+', remplace un 0 initial par
    l'indicatif indonesien (62) et retire le '+' initial.
    """
    cleaned = _NON_PHONE_CHARS.sub("", phone)
    if cleaned.startswith("0"):
        cleaned = DEFAULT_COUNTRY_CODE + cleaned[1:]
    if cleaned.startswith("+"):
        cleaned = cleaned[1:]
    return cleaned


def format_currency(amount: int) -> str:
    """Formate un montant en roupies : separateur de milliers '.', sans decimales."""
    grouped = f"{abs(int(amount)):,}".replace(",", ".")
    sign = "-" if amount < 0 else ""
    return f"{sign}Rp {grouped}"


def format_date(value: Union[date, datetime, str]) -> str:
    """Formate une date en anglais long (January 5, 2027)."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if isinstance(value, datetime):
        value = value.date()
    return f"{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def generate_voucher_message(data: WhatsAppVoucherData) -> str:
    """Construit le message WhatsApp (mise en forme WhatsApp : *gras*, _italique_)."""
    lines = [
        f"🎁 *{SPA_NAME} GIFT VOUCHER*",
        "",
        f"Dear *{data.recipient_name}*,",
        "",
        f"{data.sender_name} has gifted you a luxurious spa experience at Kalanara Spa!",
    ]
    if data.sender_message:
        lines += ["", f'_"{data.sender_message}"_', f"- {data.sender_name}"]
    lines += [
        "",
        _SEPARATOR,
        "📋 *VOUCHER DETAILS*",
        _SEPARATOR,
        "",
        f"🎫 *Code:* `{data.voucher_code}`",
        f"💆 *Treatment:* {data.service_name}",
        f"⏱️ *Duration:* {data.service_duration} minutes",
        f"💰 *Value:* {format_currency(data.amount)}",
        f"📅 *Valid Until:* {format_date(data.expiry_date)}",
        "",
        _SEPARATOR,
        "✨ *HOW TO REDEEM*",
        _SEPARATOR,
        "",
        f"1️⃣ Call us at {SPA_PHONE} to book",
        "2️⃣ Present your voucher code on arrival",
        "3️⃣ Enjoy your spa experience!",
        "",
        "🔗 *Verify your voucher:*",
        data.verify_url,
        "",
        _SEPARATOR,
        f"*{SPA_NAME}*",
        f"_{SPA_TAGLINE}_",
        "",
        f"📍 {SPA_ADDRESS}",
        f"📞 {SPA_PHONE}",
        f"✉️ {SPA_EMAIL}",
    ]
    return "\n".join(lines)


def generate_whatsapp_url(data: WhatsAppVoucherData) -> str:
    """Construit le lien wa.me avec le message pre-rempli."""
    phone = format_phone_number(data.recipient_phone)
    message = quote(generate_voucher_message(data), safe="")
    return f"https://wa.me/{phone}?text={message}"


def build_verify_url(app_url: str, code: str) -> str:
    """Lien public de verification d'un voucher."""
    return f"{app_url.rstrip('/')}/verify?code={quote(code, safe='')}"
