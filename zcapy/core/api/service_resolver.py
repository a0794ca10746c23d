"""
Service host resolution.

Maps a logical service name ("friend", "group", "file", ...) to the base
host that serves it, using the session's zpw_service_map. Candidates are a
static, caller-ordered preference list: the first one is always used.
"""
from typing import List

from ..exceptions import ZcaError, ErrorCodes, ServiceNotConfiguredError
from ..result import ApiResult
from ..session import Session


def resolve(session: Session, service_name: str) -> ApiResult[str]:
    """
    Resolve the base URL for a service.

    Args:
        session: Authenticated session
        service_name: Logical service key

    Returns:
        ApiResult with the base URL, or an api/service_not_found error
    """
    if not isinstance(service_name, str) or not service_name:
        return ApiResult.failure(
            ZcaError.invalid_input("service_name must be a non-empty string")
        )

    candidates = session.zpw_service_map.get(service_name)
    if isinstance(candidates, str):
        candidates = (candidates,)
    if not candidates:
        return ApiResult.failure(ZcaError.api(
            ErrorCodes.SERVICE_NOT_FOUND,
            f"{service_name} service URL not found",
            details={'service': service_name}
        ))

    return ApiResult.success(candidates[0])


def must_resolve(session: Session, service_name: str) -> str:
    """
    Resolve the base URL for a service the caller cannot work without.

    Raises:
        ServiceNotConfiguredError: If the session has no URL for the service
    """
    result = resolve(session, service_name)
    if not result.ok:
        raise ServiceNotConfiguredError(str(service_name))
    return result.value


def available_services(session: Session) -> List[str]:
    """Names of the services the session has hosts for."""
    return sorted(session.zpw_service_map)


class ServiceResolver:
    """Resolver bound to one session."""

    def __init__(self, session: Session):
        self.session = session

    def resolve(self, service_name: str) -> ApiResult[str]:
        return resolve(self.session, service_name)

    def must_resolve(self, service_name: str) -> str:
        return must_resolve(self.session, service_name)

    def __contains__(self, service_name: str) -> bool:
        return self.resolve(service_name).ok
