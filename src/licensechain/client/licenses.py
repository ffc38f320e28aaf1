"""License operations."""

from __future__ import annotations

import logging

from licensechain.client.http import ApiClient, prepare_body
from licensechain.errors import InvalidResponseError
from licensechain.models.license import (
    CreateLicenseRequest,
    License,
    LicenseListResponse,
    LicenseStats,
    UpdateLicenseRequest,
)
from licensechain.utils.validation import require_uuid, validate_not_empty, validate_pagination

logger = logging.getLogger(__name__)


class LicenseService:
    """Create, fetch, update, revoke and validate licenses."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, request: CreateLicenseRequest) -> License:
        """Issue a new license for ``request.user_id`` on ``request.product_id``.

        Raises:
            ValidationError: If user_id or product_id is empty.
        """
        validate_not_empty(request.user_id, "user_id")
        validate_not_empty(request.product_id, "product_id")

        action = "create license"
        payload = self._api.request(
            "POST", "/licenses", action=action, json_body=prepare_body(request)
        )
        license_ = self._api.parse_data(License, payload, action)
        logger.info("Created license id=%s", license_.id)
        return license_

    def get(self, license_id: str) -> License:
        require_uuid(license_id, "license_id")
        action = f"get license {license_id}"
        payload = self._api.request("GET", f"/licenses/{license_id}", action=action)
        return self._api.parse_data(License, payload, action)

    def update(self, license_id: str, request: UpdateLicenseRequest) -> License:
        """Apply a partial update; only fields set on ``request`` are sent."""
        require_uuid(license_id, "license_id")
        action = f"update license {license_id}"
        payload = self._api.request(
            "PUT", f"/licenses/{license_id}", action=action, json_body=prepare_body(request)
        )
        return self._api.parse_data(License, payload, action)

    def revoke(self, license_id: str) -> None:
        require_uuid(license_id, "license_id")
        self._api.request(
            "DELETE", f"/licenses/{license_id}", action=f"revoke license {license_id}"
        )
        logger.info("Revoked license id=%s", license_id)

    def validate(self, license_key: str) -> bool:
        """Ask the API whether ``license_key`` is currently valid.

        Returns:
            The API's verdict. An invalid key is a normal False, not an error.

        Raises:
            ValidationError: If license_key is empty.
            InvalidResponseError: If the response lacks a boolean ``valid``.
        """
        validate_not_empty(license_key, "license_key")
        action = "validate license"
        payload = self._api.request(
            "POST", "/licenses/verify", action=action, json_body={"key": license_key}
        )
        valid = payload.get("valid") if isinstance(payload, dict) else None
        if not isinstance(valid, bool):
            raise InvalidResponseError(f"Failed to {action}: response has no boolean 'valid'")
        return valid

    def list_user_licenses(
        self, user_id: str, page: int = 1, limit: int = 10
    ) -> LicenseListResponse:
        require_uuid(user_id, "user_id")
        page, limit = validate_pagination(page, limit)
        action = "list user licenses"
        payload = self._api.request(
            "GET",
            "/licenses",
            action=action,
            params={"user_id": user_id, "page": page, "limit": limit},
        )
        return self._api.parse(LicenseListResponse, payload, action)

    def stats(self) -> LicenseStats:
        action = "get license stats"
        payload = self._api.request("GET", "/licenses/stats", action=action)
        return self._api.parse_data(LicenseStats, payload, action)
