"""HTTP transport for the LicenseChain API.

Every request:
- carries ``Authorization: Bearer <api key>`` and the SDK User-Agent
- runs inside a retry loop (NetworkError, RateLimitError and ServerError are
  retried with exponential backoff; other errors fail on the first attempt)
- maps non-2xx responses onto the typed error taxonomy in licensechain.errors
- opens an OpenTelemetry span ``licensechain.request``

Security:
- Never log or export the API key, Authorization header or request bodies
- Span URLs are sanitized (no userinfo, querystring or fragment)
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, Final, TypeVar
from urllib.parse import urlsplit, urlunsplit

import httpx
import pydantic
from opentelemetry import trace

from licensechain.config import ClientConfig
from licensechain.errors import (
    AuthenticationError,
    InvalidResponseError,
    LicenseChainError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RetryExhaustedError,
    ServerError,
    ValidationError,
)
from licensechain.metadata import sanitize_metadata
from licensechain.models.common import RequestModel
from licensechain.resilience.retry import RetryPolicy, execute_with_retry
from licensechain.utils.text import truncate_string

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

RETRYABLE_ERRORS: Final[tuple[type[LicenseChainError], ...]] = (
    NetworkError,
    RateLimitError,
    ServerError,
)
MAX_ERROR_BODY_CHARS: Final[int] = 500
TRACER_NAME: Final[str] = "licensechain.client"


def _sanitize_url_for_span(url: str) -> str:
    """Reduce a URL to scheme, host, port and path for span attributes.

    Returns:
        Sanitized URL, or "unknown" if malformed.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
        if not host:
            return "unknown"
        port = f":{parts.port}" if parts.port else ""
        return urlunsplit((parts.scheme, f"{host}{port}", parts.path, "", ""))
    except ValueError:
        return "unknown"


def _parse_retry_after(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def _error_message(response: httpx.Response) -> str:
    """Best-effort human message from an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    return truncate_string(text, MAX_ERROR_BODY_CHARS) if text else f"HTTP {response.status_code}"


def error_from_response(response: httpx.Response, action: str) -> LicenseChainError:
    """Map a non-2xx response onto the SDK error taxonomy.

    Args:
        response: The failed HTTP response.
        action: Short description used as the message prefix, e.g. "get license".

    Returns:
        The typed error to raise.
    """
    status = response.status_code
    message = f"Failed to {action}: {_error_message(response)}"
    body = truncate_string(response.text, MAX_ERROR_BODY_CHARS)

    if status in (400, 422):
        return ValidationError(message, status_code=status, response_body=body)
    if status in (401, 403):
        return AuthenticationError(message, status_code=status, response_body=body)
    if status == 404:
        return NotFoundError(message, status_code=status, response_body=body)
    if status == 429:
        return RateLimitError(
            message,
            status_code=status,
            response_body=body,
            retry_after=_parse_retry_after(response.headers.get("Retry-After")),
        )
    if status >= 500:
        return ServerError(message, status_code=status, response_body=body)
    return LicenseChainError(message, status_code=status, response_body=body)


def prepare_body(request: RequestModel) -> dict[str, Any]:
    """Serialize a request model, dropping unset fields and sanitizing metadata.

    Metadata is sanitized from the model's own value, before JSON
    serialization can coerce or reject non-finite floats.

    Raises:
        ValidationError: If metadata holds a value outside the JSON set.
    """
    metadata = getattr(request, "metadata", None)
    clean_metadata = sanitize_metadata(metadata) if isinstance(metadata, dict) else None
    body = request.model_dump(mode="json", exclude_none=True, exclude={"metadata"})
    if clean_metadata is not None:
        body["metadata"] = clean_metadata
    return body


class ApiClient:
    """Low-level LicenseChain API transport.

    Resource services (licenses, users, products, webhooks) are built on top of
    this class; most callers should use LicenseChainClient instead.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Validated client configuration.
            http_client: Optional httpx.Client for dependency injection (testing).
                The caller keeps ownership of an injected client.
            sleep: Wait function used between retry attempts.
        """
        self._config = config
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=config.timeout_seconds)
        self._sleep = sleep
        self._retry_policy: RetryPolicy = dataclasses.replace(
            config.retry_policy(), retry_on=RETRYABLE_ERRORS
        )
        self._tracer = trace.get_tracer(TRACER_NAME)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
            "User-Agent": self._config.user_agent,
        }

    def _send_once(
        self,
        method: str,
        url: str,
        action: str,
        json_body: Any,
        params: Mapping[str, Any] | None,
    ) -> httpx.Response:
        with self._tracer.start_as_current_span(
            "licensechain.request",
            attributes={
                "http.method": method,
                "http.url": _sanitize_url_for_span(url),
            },
        ) as span:
            try:
                response = self._http.request(
                    method,
                    url,
                    json=json_body,
                    params=params,
                    headers=self._headers(),
                    timeout=self._config.timeout_seconds,
                )
            except httpx.RequestError as e:
                span.set_status(trace.StatusCode.ERROR, type(e).__name__)
                span.record_exception(e)
                raise NetworkError(
                    f"Network error occurred while trying to {action}: {type(e).__name__}"
                ) from e

            span.set_attribute("http.status_code", response.status_code)
            if response.is_success:
                return response

            span.set_status(trace.StatusCode.ERROR, f"HTTP {response.status_code}")
            raise error_from_response(response, action)

    def request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Issue a request with retries and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path below the base URL, starting with "/".
            action: Description of the operation for error messages.
            json_body: JSON-serializable request body.
            params: Query parameters.

        Returns:
            Decoded JSON body, or None for an empty response.

        Raises:
            LicenseChainError: A typed subclass describing the failure. When
                retries run out, the last attempt's error is raised with
                ``attempts`` set.
        """
        url = f"{self._config.base_url}{path}"
        logger.debug("%s %s", method, path)

        try:
            response = execute_with_retry(
                lambda: self._send_once(method, url, action, json_body, params),
                self._retry_policy,
                sleep=self._sleep,
            )
        except RetryExhaustedError as exc:
            failure = exc.last_failure
            if isinstance(failure, LicenseChainError):
                failure.attempts = exc.attempts
                raise failure
            raise

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Failed to {action}: response is not valid JSON",
                status_code=response.status_code,
            ) from e

    def parse(self, model: type[ModelT], payload: Any, action: str) -> ModelT:
        """Validate a decoded payload against ``model``.

        Raises:
            InvalidResponseError: If the payload does not match the model.
        """
        try:
            return model.model_validate(payload)
        except pydantic.ValidationError as e:
            raise InvalidResponseError(
                f"Failed to {action}: unexpected response shape ({e.error_count()} error(s))"
            ) from e

    def parse_data(self, model: type[ModelT], payload: Any, action: str) -> ModelT:
        """Unwrap a ``{"data": ...}`` envelope and validate it against ``model``."""
        if not isinstance(payload, dict) or "data" not in payload:
            raise InvalidResponseError(f"Failed to {action}: response has no 'data' field")
        return self.parse(model, payload["data"], action)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()
