"""LicenseChain Python SDK.

Typed client for the LicenseChain license-management API, plus webhook
signature verification and retry-with-backoff primitives usable on their own.
"""

from licensechain._version import __version__
from licensechain.client import LicenseChainClient
from licensechain.config import ClientConfig, load_client_config
from licensechain.errors import (
    AuthenticationError,
    ConfigurationError,
    InvalidResponseError,
    LicenseChainError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RetryCancelledError,
    RetryExhaustedError,
    ServerError,
    ValidationError,
    WebhookVerificationError,
)
from licensechain.resilience import RetryPolicy, execute_with_retry, execute_with_retry_async
from licensechain.webhooks import construct_event, sign, verify

__all__ = [
    "AuthenticationError",
    "ClientConfig",
    "ConfigurationError",
    "InvalidResponseError",
    "LicenseChainClient",
    "LicenseChainError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "RetryCancelledError",
    "RetryExhaustedError",
    "RetryPolicy",
    "ServerError",
    "ValidationError",
    "WebhookVerificationError",
    "__version__",
    "construct_event",
    "execute_with_retry",
    "execute_with_retry_async",
    "load_client_config",
    "sign",
    "verify",
]
