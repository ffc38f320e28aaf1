"""Client configuration for the LicenseChain SDK.

Configuration via environment variables:
- LICENSECHAIN_API_KEY: Required. Fail-closed if missing.
- LICENSECHAIN_BASE_URL: API root (default: https://api.licensechain.app).
- LICENSECHAIN_TIMEOUT_SECONDS: Per-request timeout (default: 30).
- LICENSECHAIN_MAX_RETRIES: Total attempts per request (default: 3).
- LICENSECHAIN_RETRY_INITIAL_DELAY_SECONDS: First backoff wait (default: 1.0).
- LICENSECHAIN_RETRY_BACKOFF_MULTIPLIER: Backoff growth factor (default: 2.0).

SECURITY: the API key is excluded from repr and never logged.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Final

from licensechain._version import __version__
from licensechain.errors import ConfigurationError
from licensechain.resilience.retry import RetryPolicy
from licensechain.utils.validation import is_valid_url

logger = logging.getLogger(__name__)

ENV_API_KEY: Final[str] = "LICENSECHAIN_API_KEY"
ENV_BASE_URL: Final[str] = "LICENSECHAIN_BASE_URL"
ENV_TIMEOUT_SECONDS: Final[str] = "LICENSECHAIN_TIMEOUT_SECONDS"
ENV_MAX_RETRIES: Final[str] = "LICENSECHAIN_MAX_RETRIES"
ENV_RETRY_INITIAL_DELAY: Final[str] = "LICENSECHAIN_RETRY_INITIAL_DELAY_SECONDS"
ENV_RETRY_BACKOFF_MULTIPLIER: Final[str] = "LICENSECHAIN_RETRY_BACKOFF_MULTIPLIER"

DEFAULT_BASE_URL: Final[str] = "https://api.licensechain.app"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_MAX_RETRIES: Final[int] = 3
DEFAULT_RETRY_INITIAL_DELAY: Final[float] = 1.0
DEFAULT_RETRY_BACKOFF_MULTIPLIER: Final[float] = 2.0
DEFAULT_USER_AGENT: Final[str] = f"licensechain-python/{__version__}"


@dataclass(frozen=True)
class ClientConfig:
    """LicenseChain client configuration (immutable).

    Attributes:
        api_key: Bearer token for the API.
        base_url: API root without trailing slash.
        timeout_seconds: Per-request timeout.
        max_retries: Total attempts per request, including the first.
        retry_initial_delay: Seconds to wait after the first failed attempt.
        retry_backoff_multiplier: Growth factor of the wait between attempts.
        user_agent: User-Agent header value.
    """

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_initial_delay: float = DEFAULT_RETRY_INITIAL_DELAY
    retry_backoff_multiplier: float = DEFAULT_RETRY_BACKOFF_MULTIPLIER
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError(f"{ENV_API_KEY} is required")
        if not is_valid_url(self.base_url):
            raise ConfigurationError(f"base_url must be an http(s) URL, got '{self.base_url}'")
        if not (math.isfinite(self.timeout_seconds) and self.timeout_seconds > 0):
            raise ConfigurationError(
                f"timeout_seconds must be a positive finite number, got {self.timeout_seconds}"
            )
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        # Fails with ConfigurationError on invalid retry values.
        self.retry_policy()

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy applied to every request."""
        return RetryPolicy(
            max_attempts=self.max_retries,
            initial_delay=self.retry_initial_delay,
            backoff_multiplier=self.retry_backoff_multiplier,
        )


def _parse_env(env_var: str, default: float, cast: type[float] | type[int]) -> float | int:
    """Parse a positive number from an environment variable.

    Args:
        env_var: Environment variable name.
        default: Value used when the variable is unset or blank.
        cast: ``int`` or ``float``.

    Raises:
        ConfigurationError: If the value is set but not a positive finite
            number (NaN and infinity are rejected).
    """
    raw = os.environ.get(env_var)
    if raw is None or not raw.strip():
        return default

    raw = raw.strip()
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{env_var} must be a positive {cast.__name__}, got '{raw}'"
        ) from e

    if not (math.isfinite(value) and value > 0):
        raise ConfigurationError(f"{env_var} must be a positive {cast.__name__}, got {value}")

    return value


def load_client_config() -> ClientConfig:
    """Load client configuration from environment variables.

    Returns:
        ClientConfig with validated values.

    Raises:
        ConfigurationError: If the API key is missing or any value is invalid.
    """
    api_key = os.environ.get(ENV_API_KEY, "").strip()
    if not api_key:
        raise ConfigurationError(f"{ENV_API_KEY} environment variable is required")

    config = ClientConfig(
        api_key=api_key,
        base_url=os.environ.get(ENV_BASE_URL, "").strip() or DEFAULT_BASE_URL,
        timeout_seconds=float(_parse_env(ENV_TIMEOUT_SECONDS, DEFAULT_TIMEOUT_SECONDS, float)),
        max_retries=int(_parse_env(ENV_MAX_RETRIES, DEFAULT_MAX_RETRIES, int)),
        retry_initial_delay=float(
            _parse_env(ENV_RETRY_INITIAL_DELAY, DEFAULT_RETRY_INITIAL_DELAY, float)
        ),
        retry_backoff_multiplier=float(
            _parse_env(ENV_RETRY_BACKOFF_MULTIPLIER, DEFAULT_RETRY_BACKOFF_MULTIPLIER, float)
        ),
    )
    logger.debug(
        "Loaded LicenseChain config: base_url=%s timeout=%.1fs max_retries=%d",
        config.base_url,
        config.timeout_seconds,
        config.max_retries,
    )
    return config
