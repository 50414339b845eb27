"""Custom exceptions shared across the request pipeline.

Every error carries the text shown to the caller in ``message``; anything
diagnostic belongs in the log record, never in the exception.
"""

from dataclasses import dataclass


@dataclass(eq=False)
class ServiceError(Exception):
    """Base exception for failures that map onto an HTTP status."""

    message: str
    code: str = "service_error"
    status_code: int = 500

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(eq=False)
class ConfigurationError(ServiceError):
    """Raised when the server is missing required configuration."""

    code: str = "configuration_error"
    status_code: int = 500


@dataclass(eq=False)
class MessageValidationError(ServiceError):
    """Raised when the chat payload is missing, empty or too long."""

    code: str = "validation_error"
    status_code: int = 400


@dataclass(eq=False)
class OriginNotAllowedError(ServiceError):
    """Raised when the caller's origin is not on the allow-list."""

    code: str = "origin_not_allowed"
    status_code: int = 403


@dataclass(eq=False)
class MethodNotAllowedError(ServiceError):
    """Raised for any method other than POST or OPTIONS."""

    code: str = "method_not_allowed"
    status_code: int = 405


@dataclass(eq=False)
class RateLimitExceededError(ServiceError):
    """Raised when a client exceeds its request quota."""

    code: str = "rate_limited"
    status_code: int = 429


@dataclass(eq=False)
class UpstreamServiceError(ServiceError):
    """Raised when the LLM provider fails or returns a non-2xx status."""

    code: str = "upstream_error"
    status_code: int = 502
    upstream_status: int | None = None
