"""Human-readable formatting and the API's timestamp format.

The API exchanges timestamps as UTC with millisecond precision:
``2024-01-31T09:15:00.000Z``. ``parse_timestamp`` is strict: malformed input
raises ValidationError instead of silently falling back to "now".
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Final

from licensechain.errors import ValidationError

TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
TIMESTAMP_FORMAT_NO_FRACTION: Final[str] = "%Y-%m-%dT%H:%M:%SZ"

BYTE_UNITS: Final[tuple[str, ...]] = ("B", "KB", "MB", "GB", "TB", "PB")
CURRENCY_SYMBOLS: Final[dict[str, str]] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}

SECONDS_PER_MINUTE: Final[int] = 60
SECONDS_PER_HOUR: Final[int] = 3600
SECONDS_PER_DAY: Final[int] = 86400


def format_bytes(num_bytes: int) -> str:
    """Format a byte count with binary (1024) units, e.g. ``1.5 KB``."""
    size = float(num_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(BYTE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    return f"{size:.1f} {BYTE_UNITS[unit_index]}"


def format_duration(seconds: int) -> str:
    """Format seconds using the two most significant units.

    Example:
        >>> format_duration(3725)
        '1h 2m'
    """
    if seconds < SECONDS_PER_MINUTE:
        return f"{seconds}s"
    if seconds < SECONDS_PER_HOUR:
        minutes, rest = divmod(seconds, SECONDS_PER_MINUTE)
        return f"{minutes}m {rest}s"
    if seconds < SECONDS_PER_DAY:
        hours, rest = divmod(seconds, SECONDS_PER_HOUR)
        return f"{hours}h {rest // SECONDS_PER_MINUTE}m"
    days, rest = divmod(seconds, SECONDS_PER_DAY)
    return f"{days}d {rest // SECONDS_PER_HOUR}h"


def format_price(price: float, currency: str = "USD") -> str:
    """Format a price with its currency symbol, or the ISO code if none is known."""
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol}{price:.2f}"


def format_timestamp(value: datetime) -> str:
    """Render a datetime in the API format. Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(text: str) -> datetime:
    """Parse an API timestamp into an aware UTC datetime.

    Args:
        text: Timestamp such as ``2024-01-31T09:15:00.000Z`` (the fractional
            part may be omitted).

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        ValidationError: If ``text`` does not match the API format.
    """
    for fmt in (TIMESTAMP_FORMAT, TIMESTAMP_FORMAT_NO_FRACTION):
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=UTC)
        except ValueError:
            continue
    raise ValidationError(f"Invalid timestamp '{text}': expected YYYY-MM-DDTHH:MM:SS.mmmZ")


def current_timestamp() -> datetime:
    return datetime.now(UTC)


def current_date() -> str:
    """Current time in the API timestamp format."""
    return format_timestamp(current_timestamp())
