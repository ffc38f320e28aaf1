"""Product resource models.

Prices are floats in the major currency unit (e.g. 19.99 USD); currency is an
ISO 4217 code from the supported set in ``licensechain.utils.validation``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, JsonValue

from licensechain.models.common import ApiModel, Page, RequestModel


class Product(ApiModel):
    id: str
    name: str
    description: str | None = None
    price: float
    currency: str
    created_at: datetime
    updated_at: datetime
    metadata: dict[str, JsonValue] = Field(default_factory=dict)


class CreateProductRequest(RequestModel):
    name: str
    description: str | None = None
    price: float
    currency: str = "USD"
    metadata: dict[str, JsonValue] = Field(default_factory=dict)


class UpdateProductRequest(RequestModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    currency: str | None = None
    metadata: dict[str, JsonValue] | None = None


class ProductStats(ApiModel):
    total: int = 0
    active: int = 0
    revenue: float = 0.0


ProductListResponse = Page[Product]
