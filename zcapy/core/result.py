"""Result value returned by pipeline operations."""
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .exceptions import ZcaError

T = TypeVar('T')


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """
    Either a success value or a ZcaError.

    Example:
        >>> result = resolve(session, 'friend')
        >>> if result.ok:
        ...     host = result.value
        ... elif result.error.code == 'service_not_found':
        ...     ...
    """
    value: Optional[T] = None
    error: Optional[ZcaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> 'ApiResult':
        return cls(value=value)

    @classmethod
    def failure(cls, error: ZcaError) -> 'ApiResult':
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, raising the error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value
