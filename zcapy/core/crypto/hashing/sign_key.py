"""Request signing keys."""
import hashlib
from typing import Any, Mapping

SIGN_PREFIX = 'zsecure'


def md5_hex(data: str) -> str:
    """Lowercase hex MD5 of a UTF-8 string."""
    return hashlib.md5(data.encode('utf-8')).hexdigest()


def _render(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def sign_key(type_name: str, params: Mapping[str, Any]) -> str:
    """
    Computes the signkey query value used by login-style endpoints.

    The digest covers the prefix, the API type name and the param values
    concatenated in sorted key order. None values contribute nothing.
    """
    values = ''.join(_render(params[key]) for key in sorted(params, key=str))
    return md5_hex(SIGN_PREFIX + type_name + values)
