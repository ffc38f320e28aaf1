"""Product operations."""

from __future__ import annotations

import logging

from licensechain.client.http import ApiClient, prepare_body
from licensechain.errors import ValidationError
from licensechain.models.product import (
    CreateProductRequest,
    Product,
    ProductListResponse,
    ProductStats,
    UpdateProductRequest,
)
from licensechain.utils.validation import (
    SUPPORTED_CURRENCIES,
    require_uuid,
    validate_amount,
    validate_currency,
    validate_not_empty,
    validate_pagination,
)

logger = logging.getLogger(__name__)


def _check_price(price: float) -> None:
    if not validate_amount(price):
        raise ValidationError(f"price must be a positive finite amount, got {price}")


def _check_currency(currency: str) -> None:
    if not validate_currency(currency):
        raise ValidationError(
            f"currency '{currency}' is not supported; expected one of "
            f"{sorted(SUPPORTED_CURRENCIES)}"
        )


class ProductService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, request: CreateProductRequest) -> Product:
        validate_not_empty(request.name, "name")
        _check_price(request.price)
        _check_currency(request.currency)
        action = "create product"
        payload = self._api.request(
            "POST", "/products", action=action, json_body=prepare_body(request)
        )
        product = self._api.parse_data(Product, payload, action)
        logger.info("Created product id=%s", product.id)
        return product

    def get(self, product_id: str) -> Product:
        require_uuid(product_id, "product_id")
        action = f"get product {product_id}"
        payload = self._api.request("GET", f"/products/{product_id}", action=action)
        return self._api.parse_data(Product, payload, action)

    def update(self, product_id: str, request: UpdateProductRequest) -> Product:
        require_uuid(product_id, "product_id")
        if request.price is not None:
            _check_price(request.price)
        if request.currency is not None:
            _check_currency(request.currency)
        action = f"update product {product_id}"
        payload = self._api.request(
            "PUT", f"/products/{product_id}", action=action, json_body=prepare_body(request)
        )
        return self._api.parse_data(Product, payload, action)

    def delete(self, product_id: str) -> None:
        require_uuid(product_id, "product_id")
        self._api.request(
            "DELETE", f"/products/{product_id}", action=f"delete product {product_id}"
        )
        logger.info("Deleted product id=%s", product_id)

    def list(self, page: int = 1, limit: int = 10) -> ProductListResponse:
        page, limit = validate_pagination(page, limit)
        action = "list products"
        payload = self._api.request(
            "GET", "/products", action=action, params={"page": page, "limit": limit}
        )
        return self._api.parse(ProductListResponse, payload, action)

    def stats(self) -> ProductStats:
        action = "get product stats"
        payload = self._api.request("GET", "/products/stats", action=action)
        return self._api.parse_data(ProductStats, payload, action)
