"""Input validation helpers.

Two families:
- predicates (``validate_email``, ``is_valid_url``, ...) return bool
- guards (``validate_not_empty``, ``validate_range``, ...) raise ValidationError

Guards are what the API client calls before issuing a request, so invalid
input never reaches the network.
"""

from __future__ import annotations

import json
import math
import re
from datetime import datetime
from typing import Final

from licensechain.errors import ValidationError

LICENSE_KEY_LENGTH: Final[int] = 32
MAX_PAGE_SIZE: Final[int] = 100
SUPPORTED_CURRENCIES: Final[frozenset[str]] = frozenset(
    {"USD", "EUR", "GBP", "CAD", "AUD", "JPY", "CHF", "CNY"}
)

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LICENSE_KEY_PATTERN = re.compile(r"^[A-Z0-9]+$")
_UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")
_URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$")


def validate_email(email: str) -> bool:
    if not email:
        return False
    return _EMAIL_PATTERN.fullmatch(email) is not None


def validate_license_key(license_key: str) -> bool:
    """Check the key is exactly 32 upper-case alphanumeric characters."""
    if len(license_key) != LICENSE_KEY_LENGTH:
        return False
    return _LICENSE_KEY_PATTERN.fullmatch(license_key) is not None


def validate_uuid(value: str) -> bool:
    """Check ``value`` is a canonical lower-case UUID string."""
    if not value:
        return False
    return _UUID_PATTERN.fullmatch(value) is not None


def validate_amount(amount: float) -> bool:
    """Check the amount is a finite, strictly positive number."""
    return amount > 0 and math.isfinite(amount)


def validate_currency(currency: str) -> bool:
    return currency in SUPPORTED_CURRENCIES


def is_valid_json(text: str) -> bool:
    if not text:
        return False
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


def is_valid_url(url: str) -> bool:
    return _URL_PATTERN.fullmatch(url) is not None


def validate_not_empty(value: str | None, field_name: str) -> None:
    """Raise ValidationError if ``value`` is None or empty."""
    if not value:
        raise ValidationError(f"{field_name} cannot be empty")


def validate_positive(value: float, field_name: str) -> None:
    if value <= 0:
        raise ValidationError(f"{field_name} must be positive")


def validate_range(value: float, minimum: float, maximum: float, field_name: str) -> None:
    """Raise ValidationError unless ``minimum <= value <= maximum``."""
    if value < minimum or value > maximum:
        raise ValidationError(f"{field_name} must be between {minimum} and {maximum}")


def validate_pagination(page: int, limit: int) -> tuple[int, int]:
    """Clamp pagination to ``page >= 1`` and ``1 <= limit <= 100``.

    Returns:
        Tuple of (page, limit) safe to send to the API.
    """
    return max(page, 1), min(max(limit, 1), MAX_PAGE_SIZE)


def validate_date_range(start: datetime, end: datetime) -> None:
    if start > end:
        raise ValidationError("Start date must be before or equal to end date")


def require_uuid(value: str | None, field_name: str) -> str:
    """Guard for resource ids: non-empty and a canonical UUID.

    Returns:
        The validated id.

    Raises:
        ValidationError: If the id is empty or not a UUID.
    """
    if not value:
        raise ValidationError(f"{field_name} cannot be empty")
    if not validate_uuid(value):
        raise ValidationError(f"{field_name} must be a valid UUID, got '{value}'")
    return value
