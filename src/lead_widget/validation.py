"""Field rules that gate a contact submission."""

from __future__ import annotations

import re
from typing import Dict

from .models import ContactFormData

# Browsers treat the byte order mark as whitespace; Python's \s does not.
_SPACE = r"[\s\ufeff]"
_NON_SPACE = r"[^\s\ufeff]"

EMAIL_RE = re.compile(rf"{_NON_SPACE}+@{_NON_SPACE}+\.{_NON_SPACE}+")
PHONE_RE = re.compile(r"\+?[0-9-]{10,}")
WHITESPACE_RE = re.compile(rf"{_SPACE}+")

FIRST_NAME_REQUIRED = "First name is required"
LAST_NAME_REQUIRED = "Last name is required"
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Invalid email format"
PHONE_REQUIRED = "Phone number is required"
PHONE_INVALID = "Invalid phone number"


def validate(data: ContactFormData) -> Dict[str, str]:
    """Return every failing field with its message; an empty dict means valid.

    Each rule runs on its own so a single pass reports the full error set.
    ``preferred_contact`` and ``message`` are never checked.
    """
    errors: Dict[str, str] = {}

    if _is_blank(data.first_name):
        errors["first_name"] = FIRST_NAME_REQUIRED
    if _is_blank(data.last_name):
        errors["last_name"] = LAST_NAME_REQUIRED

    email_error = _check_email(data.email)
    if email_error:
        errors["email"] = email_error

    phone_error = _check_phone(data.phone)
    if phone_error:
        errors["phone"] = phone_error

    return errors


def _is_blank(value: str) -> bool:
    return not WHITESPACE_RE.sub("", value)


def _check_email(value: str) -> str | None:
    if _is_blank(value):
        return EMAIL_REQUIRED
    if not EMAIL_RE.search(value):
        return EMAIL_INVALID
    return None


def _check_phone(value: str) -> str | None:
    if _is_blank(value):
        return PHONE_REQUIRED
    # Whitespace is removed first, so only ASCII digits and hyphens remain valid.
    if not PHONE_RE.fullmatch(WHITESPACE_RE.sub("", value)):
        return PHONE_INVALID
    return None
