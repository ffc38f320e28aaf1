"""LicenseChain SDK error types.

Every failure surfaced by the SDK derives from LicenseChainError and carries a
stable ``error_code`` plus the HTTP ``status_code`` that produced it (0 when no
response was received). The retry primitives add two terminal signals,
RetryExhaustedError and RetryCancelledError, which wrap the last failure.

Signature mismatch on webhook verification is not represented here:
``verify`` returns False. Only ``construct_event`` turns a mismatch into
WebhookVerificationError.
"""

from __future__ import annotations

from typing import Final

UNKNOWN_ERROR: Final[str] = "UNKNOWN_ERROR"
NETWORK_ERROR: Final[str] = "NETWORK_ERROR"
VALIDATION_ERROR: Final[str] = "VALIDATION_ERROR"
AUTHENTICATION_ERROR: Final[str] = "AUTHENTICATION_ERROR"
NOT_FOUND_ERROR: Final[str] = "NOT_FOUND_ERROR"
RATE_LIMIT_ERROR: Final[str] = "RATE_LIMIT_ERROR"
SERVER_ERROR: Final[str] = "SERVER_ERROR"
CONFIGURATION_ERROR: Final[str] = "CONFIGURATION_ERROR"
WEBHOOK_VERIFICATION_ERROR: Final[str] = "WEBHOOK_VERIFICATION_ERROR"
INVALID_RESPONSE: Final[str] = "INVALID_RESPONSE"
RETRY_EXHAUSTED: Final[str] = "RETRY_EXHAUSTED"
RETRY_CANCELLED: Final[str] = "RETRY_CANCELLED"


class LicenseChainError(Exception):
    """Base exception for all SDK failures.

    Attributes:
        message: Human-readable error message.
        error_code: Stable machine-readable code.
        status_code: HTTP status of the response, or 0 if none was received.
        response_body: Raw response text when the error came from the API.
        attempts: Requests issued before giving up (set by the API client).
    """

    default_error_code: str = UNKNOWN_ERROR
    default_status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.status_code = self.default_status_code if status_code is None else status_code
        self.response_body = response_body
        self.attempts = 1

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code != UNKNOWN_ERROR:
            parts.append(f"error_code={self.error_code}")
        if self.status_code:
            parts.append(f"status_code={self.status_code}")
        return " ".join(parts)


class NetworkError(LicenseChainError):
    """Raised when the request never produced an HTTP response."""

    default_error_code = NETWORK_ERROR
    default_status_code = 0


class ValidationError(LicenseChainError):
    """Raised on invalid input, either locally or as reported by the API (400/422)."""

    default_error_code = VALIDATION_ERROR
    default_status_code = 400


class AuthenticationError(LicenseChainError):
    """Raised when the API rejects the credentials (401/403)."""

    default_error_code = AUTHENTICATION_ERROR
    default_status_code = 401


class NotFoundError(LicenseChainError):
    """Raised when the requested resource does not exist (404)."""

    default_error_code = NOT_FOUND_ERROR
    default_status_code = 404


class RateLimitError(LicenseChainError):
    """Raised when the API throttles the client (429).

    Attributes:
        retry_after: Seconds suggested by the Retry-After header, if any.
    """

    default_error_code = RATE_LIMIT_ERROR
    default_status_code = 429

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.retry_after = retry_after


class ServerError(LicenseChainError):
    """Raised when the API fails on its side (5xx)."""

    default_error_code = SERVER_ERROR
    default_status_code = 500


class ConfigurationError(LicenseChainError):
    """Raised when SDK configuration or a retry policy is invalid."""

    default_error_code = CONFIGURATION_ERROR
    default_status_code = 500


class WebhookVerificationError(LicenseChainError):
    """Raised by construct_event when a delivery's signature does not match."""

    default_error_code = WEBHOOK_VERIFICATION_ERROR
    default_status_code = 400


class InvalidResponseError(LicenseChainError):
    """Raised when a 2xx response body is not the JSON shape the SDK expects."""

    default_error_code = INVALID_RESPONSE
    default_status_code = 200


class RetryExhaustedError(LicenseChainError):
    """Raised when every configured attempt of an operation failed.

    Attributes:
        attempts: Number of attempts made.
        last_failure: Exception raised by the final attempt.
    """

    default_error_code = RETRY_EXHAUSTED
    default_status_code = 0

    def __init__(self, attempts: int, last_failure: BaseException) -> None:
        super().__init__(
            f"Operation failed after {attempts} attempt(s): "
            f"{type(last_failure).__name__}: {last_failure}"
        )
        self.attempts = attempts
        self.last_failure = last_failure


class RetryCancelledError(LicenseChainError):
    """Raised when a retry loop is cancelled while waiting between attempts.

    Attributes:
        attempts: Number of attempts made before cancellation.
        last_failure: Exception raised by the most recent attempt.
    """

    default_error_code = RETRY_CANCELLED
    default_status_code = 0

    def __init__(self, attempts: int, last_failure: BaseException | None) -> None:
        super().__init__(f"Retry cancelled after {attempts} attempt(s)")
        self.attempts = attempts
        self.last_failure = last_failure
