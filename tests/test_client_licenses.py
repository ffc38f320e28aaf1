"""Tests for LicenseService against a mocked API."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from licensechain.client import LicenseChainClient
from licensechain.errors import InvalidResponseError, NotFoundError, ValidationError
from licensechain.models.license import (
    CreateLicenseRequest,
    LicenseStatus,
    UpdateLicenseRequest,
)

MakeClient = Callable[[Callable[[httpx.Request], httpx.Response]], LicenseChainClient]

LICENSE_ID = "3f2b8c1e-7a4d-4e1b-9c6f-2d8e5a7b9c01"
USER_ID = "9a1c3e5f-2b4d-4f6a-8c0e-1d3f5a7b9c2e"
PRODUCT_ID = "5c7e9a1b-3d5f-4b7c-9e1a-2c4e6a8b0d3f"


def license_json(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": LICENSE_ID,
        "user_id": USER_ID,
        "product_id": PRODUCT_ID,
        "license_key": "ABCDEFGHIJKLMNOPQRSTUVWXYZ123456",
        "status": "active",
        "created_at": "2024-01-31T09:15:00.000Z",
        "updated_at": "2024-01-31T09:15:00.000Z",
        "expires_at": None,
        "metadata": {},
    }
    data.update(overrides)
    return data


class TestCreate:
    def test_posts_body_and_parses(self, make_client: MakeClient) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"data": license_json(metadata={"seats": 5})})

        client = make_client(handler)
        license_ = client.licenses.create(
            CreateLicenseRequest(user_id=USER_ID, product_id=PRODUCT_ID, metadata={"seats": 5})
        )

        assert seen[0].method == "POST"
        assert seen[0].url.path == "/licenses"
        assert json.loads(seen[0].content) == {
            "user_id": USER_ID,
            "product_id": PRODUCT_ID,
            "metadata": {"seats": 5},
        }
        assert license_.id == LICENSE_ID
        assert license_.metadata == {"seats": 5}
        assert license_.created_at == datetime(2024, 1, 31, 9, 15, tzinfo=UTC)

    def test_empty_user_id_rejected_locally(self, make_client: MakeClient) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500)

        client = make_client(handler)
        with pytest.raises(ValidationError, match="user_id cannot be empty"):
            client.licenses.create(CreateLicenseRequest(user_id="", product_id=PRODUCT_ID))
        assert calls == []

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_metadata_rejected_locally(
        self, make_client: MakeClient, value: float
    ) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(201, json={"data": license_json()})

        client = make_client(handler)
        with pytest.raises(ValidationError, match="Metadata value at 'nested.score'"):
            client.licenses.create(
                CreateLicenseRequest(
                    user_id=USER_ID, product_id=PRODUCT_ID, metadata={"nested": {"score": value}}
                )
            )
        assert calls == []


class TestGetUpdateRevoke:
    def test_get(self, make_client: MakeClient) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == f"/licenses/{LICENSE_ID}"
            return httpx.Response(200, json={"data": license_json(status="expired")})

        license_ = make_client(handler).licenses.get(LICENSE_ID)
        assert license_.status == LicenseStatus.EXPIRED

    def test_get_not_found(self, make_client: MakeClient, sleep_calls: list[float]) -> None:
        client = make_client(
            lambda request: httpx.Response(404, json={"message": "License not found"})
        )
        with pytest.raises(NotFoundError, match="License not found"):
            client.licenses.get(LICENSE_ID)
        assert sleep_calls == []

    def test_get_rejects_non_uuid(self, make_client: MakeClient) -> None:
        client = make_client(lambda request: httpx.Response(500))
        with pytest.raises(ValidationError, match="license_id must be a valid UUID"):
            client.licenses.get("lic_123")

    def test_update_sends_only_set_fields(self, make_client: MakeClient) -> None:
        bodies: list[Any] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PUT"
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"data": license_json(status="suspended")})

        license_ = make_client(handler).licenses.update(
            LICENSE_ID, UpdateLicenseRequest(status=LicenseStatus.SUSPENDED)
        )

        assert bodies == [{"status": "suspended"}]
        assert license_.status == "suspended"

    def test_revoke(self, make_client: MakeClient) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        assert make_client(handler).licenses.revoke(LICENSE_ID) is None
        assert seen[0].method == "DELETE"
        assert seen[0].url.path == f"/licenses/{LICENSE_ID}"


class TestValidate:
    @pytest.mark.parametrize("verdict", [True, False])
    def test_returns_api_verdict(self, make_client: MakeClient, verdict: bool) -> None:
        bodies: list[Any] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/licenses/verify"
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"valid": verdict})

        key = "ABCDEFGHIJKLMNOPQRSTUVWXYZ123456"
        assert make_client(handler).licenses.validate(key) is verdict
        assert bodies == [{"key": key}]

    def test_missing_verdict_is_invalid_response(self, make_client: MakeClient) -> None:
        client = make_client(lambda request: httpx.Response(200, json={"status": "ok"}))
        with pytest.raises(InvalidResponseError):
            client.licenses.validate("KEY")

    def test_empty_key_rejected(self, make_client: MakeClient) -> None:
        client = make_client(lambda request: httpx.Response(200, json={"valid": True}))
        with pytest.raises(ValidationError):
            client.licenses.validate("")


class TestListAndStats:
    def test_list_user_licenses_clamps_pagination(self, make_client: MakeClient) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"data": [license_json()], "total": 250, "page": 1, "limit": 100},
            )

        page = make_client(handler).licenses.list_user_licenses(USER_ID, page=0, limit=1000)

        params = seen[0].url.params
        assert params["user_id"] == USER_ID
        assert params["page"] == "1"
        assert params["limit"] == "100"
        assert len(page.data) == 1
        assert page.total == 250
        assert page.has_next

    def test_stats(self, make_client: MakeClient) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/licenses/stats"
            return httpx.Response(
                200,
                json={"data": {"total": 10, "active": 7, "expired": 2, "revoked": 1,
                               "revenue": 199.9}},
            )

        stats = make_client(handler).licenses.stats()
        assert stats.total == 10
        assert stats.active == 7
        assert stats.revenue == pytest.approx(199.9)
