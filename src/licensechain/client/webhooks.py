"""Webhook subscription operations and inbound event handling."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from licensechain.client.http import ApiClient, prepare_body
from licensechain.errors import ValidationError
from licensechain.models.webhook import (
    CreateWebhookRequest,
    UpdateWebhookRequest,
    Webhook,
    WebhookEvent,
    WebhookListResponse,
)
from licensechain.utils.validation import is_valid_url, require_uuid, validate_pagination
from licensechain.webhooks.events import construct_event

logger = logging.getLogger(__name__)


def _check_url(url: str) -> None:
    if not is_valid_url(url):
        raise ValidationError(f"url must be an http(s) URL, got '{url}'")


def _check_events(events: Sequence[str]) -> None:
    if not events:
        raise ValidationError("events cannot be empty")
    if any(not event for event in events):
        raise ValidationError("events cannot contain empty event types")


class WebhookService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, request: CreateWebhookRequest) -> Webhook:
        _check_url(request.url)
        _check_events(request.events)
        action = "create webhook"
        payload = self._api.request(
            "POST", "/webhooks", action=action, json_body=prepare_body(request)
        )
        webhook = self._api.parse_data(Webhook, payload, action)
        logger.info("Created webhook id=%s events=%s", webhook.id, ",".join(webhook.events))
        return webhook

    def get(self, webhook_id: str) -> Webhook:
        require_uuid(webhook_id, "webhook_id")
        action = f"get webhook {webhook_id}"
        payload = self._api.request("GET", f"/webhooks/{webhook_id}", action=action)
        return self._api.parse_data(Webhook, payload, action)

    def update(self, webhook_id: str, request: UpdateWebhookRequest) -> Webhook:
        require_uuid(webhook_id, "webhook_id")
        if request.url is not None:
            _check_url(request.url)
        if request.events is not None:
            _check_events(request.events)
        action = f"update webhook {webhook_id}"
        payload = self._api.request(
            "PUT", f"/webhooks/{webhook_id}", action=action, json_body=prepare_body(request)
        )
        return self._api.parse_data(Webhook, payload, action)

    def delete(self, webhook_id: str) -> None:
        require_uuid(webhook_id, "webhook_id")
        self._api.request(
            "DELETE", f"/webhooks/{webhook_id}", action=f"delete webhook {webhook_id}"
        )
        logger.info("Deleted webhook id=%s", webhook_id)

    def list(self, page: int = 1, limit: int = 10) -> WebhookListResponse:
        page, limit = validate_pagination(page, limit)
        action = "list webhooks"
        payload = self._api.request(
            "GET", "/webhooks", action=action, params={"page": page, "limit": limit}
        )
        return self._api.parse(WebhookListResponse, payload, action)

    @staticmethod
    def construct_event(
        payload: bytes | str,
        signature: str,
        secret: bytes | str,
    ) -> WebhookEvent:
        """Verify and parse an inbound delivery. See licensechain.webhooks.construct_event."""
        return construct_event(payload, signature, secret)
