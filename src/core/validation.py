"""Input sanitization and format validators shared by the services."""

import re
from typing import Optional

from src.domain.exceptions import ValidationException

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CANADIAN_POSTAL_PATTERN = re.compile(r"^[A-Za-z]\d[A-Za-z][ -]?\d[A-Za-z]\d$")
US_ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)


def sanitize_text(value: Optional[str]) -> Optional[str]:
    """Trim whitespace and drop angle brackets from free text."""
    if value is None:
        return None
    return value.strip().replace("<", "").replace(">", "")


def validate_email(email: str) -> str:
    if not email or not EMAIL_PATTERN.match(email.strip()):
        raise ValidationException("Invalid email format")
    return email.strip()


def validate_phone(phone: str) -> str:
    digits = re.sub(r"[\s().-]", "", phone or "")
    if not re.fullmatch(r"\+?\d{10,15}", digits):
        raise ValidationException("Invalid phone number format")
    return digits


def validate_password(password: str) -> str:
    if len(password or "") < 8:
        raise ValidationException("Password must be at least 8 characters long")
    if not re.search(r"[A-Z]", password):
        raise ValidationException("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValidationException("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        raise ValidationException("Password must contain at least one number")
    return password


def validate_url(url: str) -> str:
    if not URL_PATTERN.match(url or ""):
        raise ValidationException(f"Invalid URL: {url}")
    return url


def validate_postal_code(postal_code: str) -> str:
    value = (postal_code or "").strip()
    if not (CANADIAN_POSTAL_PATTERN.match(value) or US_ZIP_PATTERN.match(value)):
        raise ValidationException(f"Invalid postal code: {postal_code}")
    return value


def format_phone_number(phone: Optional[str]) -> Optional[str]:
    """
    Normalize a phone number to E.164.

    Numbers without a country code are assumed to be North American.
    """
    if not phone:
        return None
    digits = re.sub(r"\D", "", phone)
    if phone.strip().startswith("+"):
        return f"+{digits}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+{digits}"
    return f"+1{digits}"
