"""Webhook signing, verification and event parsing."""

from licensechain.webhooks.events import construct_event
from licensechain.webhooks.signing import SIGNATURE_HEADER, sign, sign_headers, verify

__all__ = ["SIGNATURE_HEADER", "construct_event", "sign", "sign_headers", "verify"]
