"""
Input checks shared by endpoint callers.

Each check returns a ZcaError with category invalid_input when the value
is unacceptable, and None otherwise, so callers can report the failure as
a result instead of raising.
"""
from typing import Any, Collection, Optional

from ..exceptions import ZcaError
from ..result import ApiResult


def check_non_empty_string(value: Any, name: str) -> Optional[ZcaError]:
    if not isinstance(value, str) or not value:
        return ZcaError.invalid_input(f"{name} must be a non-empty string")
    return None


def check_bool(value: Any, name: str) -> Optional[ZcaError]:
    if not isinstance(value, bool):
        return ZcaError.invalid_input(f"{name} must be a boolean")
    return None


def check_positive_int(value: Any, name: str) -> Optional[ZcaError]:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return ZcaError.invalid_input(f"{name} must be a positive integer")
    return None


def check_member(value: Any, allowed: Collection[Any], name: str) -> Optional[ZcaError]:
    if value not in allowed:
        choices = ', '.join(repr(a) for a in allowed)
        return ZcaError.invalid_input(f"{name} must be one of: {choices}")
    return None


def first_error(*errors: Optional[ZcaError]) -> Optional[ZcaError]:
    """First failed check, in argument order."""
    for error in errors:
        if error is not None:
            return error
    return None


def validated(*errors: Optional[ZcaError]) -> ApiResult[None]:
    """Fold a set of checks into a result."""
    error = first_error(*errors)
    if error is not None:
        return ApiResult.failure(error)
    return ApiResult.success(None)
