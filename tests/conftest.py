"""Pytest configuration and fixtures for LicenseChain SDK tests.

Provides a clean LICENSECHAIN_* environment and an httpx.MockTransport-backed
client factory so no test touches the network.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from licensechain.client import LicenseChainClient
from licensechain.config import ClientConfig

TEST_API_KEY = "lc_test_key_123"
TEST_BASE_URL = "https://api.test.licensechain.app"

ENV_VARS = (
    "LICENSECHAIN_API_KEY",
    "LICENSECHAIN_BASE_URL",
    "LICENSECHAIN_TIMEOUT_SECONDS",
    "LICENSECHAIN_MAX_RETRIES",
    "LICENSECHAIN_RETRY_INITIAL_DELAY_SECONDS",
    "LICENSECHAIN_RETRY_BACKOFF_MULTIPLIER",
    "LICENSECHAIN_WEBHOOK_SECRET",
)


@pytest.fixture(autouse=True)
def clean_licensechain_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove LICENSECHAIN_* variables so tests never see the host's configuration."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_config() -> ClientConfig:
    return ClientConfig(
        api_key=TEST_API_KEY,
        base_url=TEST_BASE_URL,
        timeout_seconds=5.0,
        max_retries=3,
        retry_initial_delay=0.5,
        retry_backoff_multiplier=2.0,
    )


@pytest.fixture
def sleep_calls() -> list[float]:
    """Delays requested by the client's retry loop (no real waiting)."""
    return []


@pytest.fixture
def make_client(
    test_config: ClientConfig, sleep_calls: list[float]
) -> Callable[[Callable[[httpx.Request], httpx.Response]], LicenseChainClient]:
    """Build a LicenseChainClient whose HTTP traffic goes to ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> LicenseChainClient:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        return LicenseChainClient(test_config, http_client=http_client, sleep=sleep_calls.append)

    return factory
