"""
Session module.

Immutable per-login session context and per-client credentials.
"""
from .models import (
    Session,
    Credentials,
    normalize_service_map,
    normalize_cookies,
    parse_cookie_string,
    generate_secret_key,
    DEFAULT_API_TYPE,
    DEFAULT_API_VERSION,
    DEFAULT_LANGUAGE,
)

__all__ = [
    'Session',
    'Credentials',
    'normalize_service_map',
    'normalize_cookies',
    'parse_cookie_string',
    'generate_secret_key',
    'DEFAULT_API_TYPE',
    'DEFAULT_API_VERSION',
    'DEFAULT_LANGUAGE',
]
