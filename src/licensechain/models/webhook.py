"""Webhook subscription and event models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field, JsonValue

from licensechain.models.common import ApiModel, Page, RequestModel


class WebhookEventType(StrEnum):
    """Event types delivered to webhook subscriptions."""

    LICENSE_CREATED = "license.created"
    LICENSE_UPDATED = "license.updated"
    LICENSE_REVOKED = "license.revoked"
    LICENSE_EXPIRED = "license.expired"
    USER_CREATED = "user.created"
    USER_UPDATED = "user.updated"
    PRODUCT_CREATED = "product.created"
    PRODUCT_UPDATED = "product.updated"


class Webhook(ApiModel):
    """A webhook subscription.

    Attributes:
        id: Subscription UUID.
        url: Delivery target.
        events: Subscribed event types.
        secret: Signing secret; usually only returned on creation. Hidden
            from repr.
    """

    id: str
    url: str
    events: list[str] = Field(default_factory=list)
    secret: str | None = Field(default=None, repr=False)
    created_at: datetime
    updated_at: datetime


class CreateWebhookRequest(RequestModel):
    url: str
    events: list[str]
    secret: str | None = Field(default=None, repr=False)


class UpdateWebhookRequest(RequestModel):
    url: str | None = None
    events: list[str] | None = None
    secret: str | None = Field(default=None, repr=False)


class WebhookEvent(ApiModel):
    """An inbound webhook delivery body.

    ``signature`` is filled from the delivery header by ``construct_event``
    when the body itself does not carry one.
    """

    id: str
    type: str
    data: JsonValue = None
    timestamp: datetime
    signature: str | None = None


WebhookListResponse = Page[Webhook]
