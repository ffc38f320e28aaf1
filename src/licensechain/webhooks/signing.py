"""Webhook HMAC-SHA256 signing and verification.

Signature: lowercase hex digest of HMAC-SHA256(secret, raw_body), 64 chars.
str payloads and secrets are UTF-8 encoded before hashing.

Header carried by deliveries:
- X-LicenseChain-Signature: <hex>

Verification is a pure function of (payload, secret) compared against the
provided signature. Comparison is case-insensitive and constant-time over the
full digest; a mismatch returns False and is never raised.

SECURITY: Never log secrets or signatures.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Final

SIGNATURE_HEADER: Final[str] = "X-LicenseChain-Signature"
SIGNATURE_HEX_LENGTH: Final[int] = 64


def _to_bytes(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def sign(payload: bytes | str, secret: bytes | str) -> str:
    """Compute the webhook signature for a payload.

    Args:
        payload: Raw request body. An empty body is valid.
        secret: Shared webhook secret.

    Returns:
        Lowercase hex digest of HMAC-SHA256(secret, payload).

    Example:
        >>> len(sign(b'{"type":"license.created"}', "whsec"))
        64
    """
    return hmac.new(
        key=_to_bytes(secret),
        msg=_to_bytes(payload),
        digestmod=hashlib.sha256,
    ).hexdigest()


def verify(payload: bytes | str, provided_signature: str, secret: bytes | str) -> bool:
    """Verify a webhook signature.

    Args:
        payload: Raw request body exactly as received.
        provided_signature: Hex signature from the X-LicenseChain-Signature
            header, any letter case.
        secret: Shared webhook secret.

    Returns:
        True if the signature matches, False otherwise (including malformed,
        truncated or non-ASCII signatures).
    """
    if not isinstance(provided_signature, str):
        return False

    expected = sign(payload, secret).encode("ascii")
    provided = provided_signature.lower().encode("utf-8")
    return hmac.compare_digest(expected, provided)


def sign_headers(payload: bytes | str, secret: bytes | str) -> dict[str, str]:
    """Build the signature header dict for a delivery of ``payload``."""
    return {SIGNATURE_HEADER: sign(payload, secret)}
