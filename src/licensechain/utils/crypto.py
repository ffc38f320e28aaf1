"""Hashing, encoding and random generation helpers.

All randomness comes from the ``secrets`` module. ``sha1`` and ``md5`` exist
for interoperability checksums only and must not be used for security.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
import string
import urllib.parse
import uuid
from typing import Final

from licensechain.errors import ValidationError
from licensechain.utils.validation import LICENSE_KEY_LENGTH

LICENSE_KEY_ALPHABET: Final[str] = string.ascii_uppercase + string.digits
DEFAULT_RANDOM_ALPHABET: Final[str] = string.ascii_letters + string.digits


def generate_random_string(length: int, characters: str = DEFAULT_RANDOM_ALPHABET) -> str:
    """Generate a random string drawn from ``characters``.

    Raises:
        ValueError: If length is negative or characters is empty.
    """
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    if not characters:
        raise ValueError("characters must not be empty")
    return "".join(secrets.choice(characters) for _ in range(length))


def generate_license_key() -> str:
    """Generate a 32-character upper-case alphanumeric license key."""
    return generate_random_string(LICENSE_KEY_LENGTH, LICENSE_KEY_ALPHABET)


def generate_uuid() -> str:
    return str(uuid.uuid4())


def generate_random_bytes(length: int) -> bytes:
    return secrets.token_bytes(length)


def sha256(data: str) -> str:
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def sha1(data: str) -> str:
    return hashlib.sha1(data.encode("utf-8"), usedforsecurity=False).hexdigest()


def md5(data: str) -> str:
    return hashlib.md5(data.encode("utf-8"), usedforsecurity=False).hexdigest()


def base64_encode(data: str) -> str:
    return base64.b64encode(data.encode("utf-8")).decode("ascii")


def base64_decode(data: str) -> str:
    """Decode standard base64 into UTF-8 text.

    Raises:
        ValidationError: If ``data`` is not valid base64 or not UTF-8 text.
    """
    try:
        return base64.b64decode(data, validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError) as e:
        raise ValidationError(f"Invalid base64 input: {e}") from e


def url_encode(data: str) -> str:
    """Form-encode ``data`` (spaces become ``+``)."""
    return urllib.parse.quote_plus(data)


def url_decode(data: str) -> str:
    return urllib.parse.unquote_plus(data)
