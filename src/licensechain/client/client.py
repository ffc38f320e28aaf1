"""High-level LicenseChain client."""

from __future__ import annotations

import time
from collections.abc import Callable
from types import TracebackType

import httpx

from licensechain.client.http import ApiClient
from licensechain.client.licenses import LicenseService
from licensechain.client.products import ProductService
from licensechain.client.users import UserService
from licensechain.client.webhooks import WebhookService
from licensechain.config import ClientConfig, load_client_config


class LicenseChainClient:
    """Entry point to the LicenseChain API.

    Example:
        >>> with LicenseChainClient(ClientConfig(api_key="lc_live_...")) as client:
        ...     client.licenses.validate("ABCDEFGHIJKLMNOPQRSTUVWXYZ123456")

    Attributes:
        licenses: License operations.
        users: User operations.
        products: Product operations.
        webhooks: Webhook subscription operations and event verification.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration. Loaded from the environment if omitted.
            http_client: Optional httpx.Client for dependency injection (testing).
            sleep: Wait function used between retry attempts.

        Raises:
            ConfigurationError: If config is omitted and the environment is invalid.
        """
        self._api = ApiClient(config or load_client_config(), http_client=http_client, sleep=sleep)
        self.licenses = LicenseService(self._api)
        self.users = UserService(self._api)
        self.products = ProductService(self._api)
        self.webhooks = WebhookService(self._api)

    @property
    def config(self) -> ClientConfig:
        return self._api.config

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._api.close()

    def __enter__(self) -> LicenseChainClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
