"""Inbound webhook event construction.

A delivery is trusted only after its signature verifies against the raw body.
Parsing happens on the verified bytes, never on a re-serialized copy.
"""

from __future__ import annotations

import logging

import pydantic

from licensechain.errors import ValidationError, WebhookVerificationError
from licensechain.models.webhook import WebhookEvent
from licensechain.webhooks.signing import verify

logger = logging.getLogger(__name__)


def construct_event(
    payload: bytes | str,
    signature: str,
    secret: bytes | str,
) -> WebhookEvent:
    """Verify a webhook delivery and parse it into a WebhookEvent.

    Args:
        payload: Raw request body exactly as received.
        signature: Value of the X-LicenseChain-Signature header.
        secret: Shared secret of the webhook subscription.

    Returns:
        Parsed event. ``signature`` is set from the header if the body lacks it.

    Raises:
        WebhookVerificationError: If the signature does not match.
        ValidationError: If the verified body is not a valid event object.
    """
    if not verify(payload, signature, secret):
        logger.warning("Rejected webhook delivery: signature mismatch")
        raise WebhookVerificationError("Webhook signature verification failed")

    try:
        event = WebhookEvent.model_validate_json(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid webhook event body: {e.error_count()} error(s)") from e

    if event.signature is None:
        event = event.model_copy(update={"signature": signature.lower()})

    logger.debug("Accepted webhook event id=%s type=%s", event.id, event.type)
    return event
