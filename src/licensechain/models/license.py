"""License resource models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field, JsonValue

from licensechain.models.common import ApiModel, Page, RequestModel


class LicenseStatus(StrEnum):
    """License lifecycle states accepted by the API."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    REVOKED = "revoked"
    SUSPENDED = "suspended"


class License(ApiModel):
    """A license issued to a user for a product.

    ``status`` stays a plain string so states added server-side still parse.
    """

    id: str
    user_id: str
    product_id: str
    license_key: str
    status: str
    created_at: datetime
    updated_at: datetime
    expires_at: datetime | None = None
    metadata: dict[str, JsonValue] = Field(default_factory=dict)


class CreateLicenseRequest(RequestModel):
    user_id: str
    product_id: str
    metadata: dict[str, JsonValue] = Field(default_factory=dict)


class UpdateLicenseRequest(RequestModel):
    """Partial update; fields left as None are not sent."""

    status: LicenseStatus | None = None
    expires_at: datetime | None = None
    metadata: dict[str, JsonValue] | None = None


class LicenseStats(ApiModel):
    total: int = 0
    active: int = 0
    expired: int = 0
    revoked: int = 0
    revenue: float = 0.0


LicenseListResponse = Page[License]
