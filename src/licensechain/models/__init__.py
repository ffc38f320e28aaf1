"""Typed request and response models for the LicenseChain API."""

from licensechain.models.common import ApiModel, Page, RequestModel
from licensechain.models.license import (
    CreateLicenseRequest,
    License,
    LicenseListResponse,
    LicenseStats,
    LicenseStatus,
    UpdateLicenseRequest,
)
from licensechain.models.product import (
    CreateProductRequest,
    Product,
    ProductListResponse,
    ProductStats,
    UpdateProductRequest,
)
from licensechain.models.user import (
    CreateUserRequest,
    UpdateUserRequest,
    User,
    UserListResponse,
    UserStats,
)
from licensechain.models.webhook import (
    CreateWebhookRequest,
    UpdateWebhookRequest,
    Webhook,
    WebhookEvent,
    WebhookEventType,
    WebhookListResponse,
)

__all__ = [
    "ApiModel",
    "CreateLicenseRequest",
    "CreateProductRequest",
    "CreateUserRequest",
    "CreateWebhookRequest",
    "License",
    "LicenseListResponse",
    "LicenseStats",
    "LicenseStatus",
    "Page",
    "Product",
    "ProductListResponse",
    "ProductStats",
    "RequestModel",
    "UpdateLicenseRequest",
    "UpdateProductRequest",
    "UpdateUserRequest",
    "UpdateWebhookRequest",
    "User",
    "UserListResponse",
    "UserStats",
    "Webhook",
    "WebhookEvent",
    "WebhookEventType",
    "WebhookListResponse",
]
