"""
Error taxonomy for the Zalo API pipeline.

Every failure produced by the pipeline is a ZcaError carrying a category,
a symbolic (or remote numeric) code and a human-readable message. Pipeline
functions hand these back inside an ApiResult instead of raising them, so
callers can branch on category/code.

The one exception is ServiceNotConfiguredError: a required service URL that
is missing from the session is a configuration defect and aborts the
operation immediately.
"""
from enum import Enum
from typing import Any, Dict, Optional, Union


class ErrorCategory(str, Enum):
    """Closed set of error categories."""
    INVALID_INPUT = 'invalid_input'
    API = 'api'
    SECURITY = 'security'
    NETWORK = 'network'


class ErrorCodes:
    """Symbolic error codes produced inside the pipeline."""

    INVALID_INPUT = 'invalid_input'
    SERVICE_NOT_FOUND = 'service_not_found'
    INVALID_RESPONSE = 'invalid_response'
    REMOTE_ERROR = 'remote_error'
    ENCRYPTION_FAILED = 'encryption_failed'
    DECRYPTION_FAILED = 'decryption_failed'
    HTTP_ERROR = 'http_error'
    REQUEST_FAILED = 'request_failed'


ErrorCode = Union[str, int]


class ZcaError(Exception):
    """
    Typed pipeline error.

    Two errors are equal when category, code and message match; the
    underlying reason and details are informational only.
    """

    def __init__(
        self,
        category: ErrorCategory,
        code: ErrorCode,
        message: str,
        retryable: bool = False,
        reason: Any = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.category = ErrorCategory(category)
        self.code = code
        self.message = message
        self.retryable = retryable
        self.reason = reason
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.category.value}:{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"ZcaError(category={self.category.value!r}, "
            f"code={self.code!r}, message={self.message!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZcaError):
            return NotImplemented
        return (
            (self.category, self.code, self.message)
            == (other.category, other.code, other.message)
        )

    def __hash__(self) -> int:
        return hash((self.category, self.code, self.message))

    @classmethod
    def invalid_input(cls, message: str, **kwargs) -> 'ZcaError':
        """Caller-supplied argument failed a precondition."""
        return cls(ErrorCategory.INVALID_INPUT, ErrorCodes.INVALID_INPUT, message, **kwargs)

    @classmethod
    def api(cls, code: ErrorCode, message: str, **kwargs) -> 'ZcaError':
        """Missing service or application-level failure reported by the server."""
        return cls(ErrorCategory.API, code, message, **kwargs)

    @classmethod
    def security(cls, code: ErrorCode, message: str, **kwargs) -> 'ZcaError':
        """Cipher failure."""
        return cls(ErrorCategory.SECURITY, code, message, **kwargs)

    @classmethod
    def network(cls, code: ErrorCode, message: str, **kwargs) -> 'ZcaError':
        """Transport failure; retryable unless stated otherwise."""
        kwargs.setdefault('retryable', True)
        return cls(ErrorCategory.NETWORK, code, message, **kwargs)


class ServiceNotConfiguredError(RuntimeError):
    """
    Raised when a required service URL is absent from the session.

    Not a ZcaError on purpose: it signals a misconfigured session, not a
    condition callers are expected to handle.
    """

    def __init__(self, service_name: str) -> None:
        self.service_name = service_name
        super().__init__(f"{service_name} service URL not found")
