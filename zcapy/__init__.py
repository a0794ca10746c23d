"""
zcapy - Async Python client for the Zalo web API.

Usage:
    >>> from zcapy import Session, Credentials, AsyncAPIClient
    >>>
    >>> session = Session.from_login_response(login_data)
    >>> async with AsyncAPIClient(session, credentials) as client:
    ...     result = await client.post('friend', '/api/friend/feed/block', params)
"""
from .core.logging import setup_logging
from .core.exceptions import ZcaError, ErrorCategory, ErrorCodes, ServiceNotConfiguredError
from .core.result import ApiResult
from .core.session import Session, Credentials
from .core.crypto import ParamCipher, sign_key
from .core.api import (
    AsyncAPIClient,
    AsyncTransport,
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    ServiceResolver,
    ResponseHandler,
    HttpResponse,
    resolve,
    must_resolve,
)
from .core.api.request import build, build_with_payload

__version__ = '0.1.0'

__all__ = [
    'Session',
    'Credentials',
    'AsyncAPIClient',
    'AsyncTransport',
    'ParamCipher',
    'ResponseHandler',
    'HttpResponse',
    'ServiceResolver',
    'resolve',
    'must_resolve',
    'build',
    'build_with_payload',
    'sign_key',
    'ApiResult',
    'ZcaError',
    'ErrorCategory',
    'ErrorCodes',
    'ServiceNotConfiguredError',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'setup_logging',
]
