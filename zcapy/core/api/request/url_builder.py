"""
Request URL construction.

Every API URL carries the protocol version (zpw_ver) and type (zpw_type)
of the session; GET-style calls also carry the encrypted payload as
'params'. Query values are percent-encoded exactly once: a query already
present on the base URL is decoded before the whole query is re-encoded.
"""
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from ...session import Session

PROTOCOL_KEYS = ('zpw_ver', 'zpw_type', 'params')
RETRY_KEY = 'nretry'


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _encode_query(items: Iterable[Tuple[str, str]]) -> str:
    return '&'.join(
        f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in items
    )


def _with_query(base_url: str, items: Iterable[Tuple[str, str]]) -> str:
    parts = urlsplit(base_url)
    return urlunsplit(parts._replace(query=_encode_query(items)))


def _compose(
    base_url: str,
    session: Session,
    extra_query: Optional[Mapping[str, Any]] = None,
    payload: Optional[str] = None
) -> str:
    items = [
        ('zpw_ver', str(session.api_version)),
        ('zpw_type', str(session.api_type)),
    ]
    if payload is not None:
        items.append(('params', str(payload)))

    merged: Dict[str, str] = dict(parse_qsl(urlsplit(base_url).query, keep_blank_values=True))
    for key, value in (extra_query or {}).items():
        if value is not None:
            merged[str(key)] = _render(value)

    items.extend(
        (key, value) for key, value in merged.items() if key not in PROTOCOL_KEYS
    )
    return _with_query(base_url, items)


def build(base_url: str, extra_query: Optional[Mapping[str, Any]], session: Session) -> str:
    """
    Build a request URL with the session's protocol parameters.

    Args:
        base_url: Resolved host plus endpoint path
        extra_query: Additional query parameters; protocol keys are ignored
        session: Session providing api_version and api_type

    Returns:
        URL with zpw_ver and zpw_type, followed by any other parameters
    """
    return _compose(base_url, session, extra_query)


def build_with_payload(base_url: str, encrypted_payload: str, session: Session,
                       extra_query: Optional[Mapping[str, Any]] = None) -> str:
    """Build a request URL that carries the encrypted payload as 'params'."""
    return _compose(base_url, session, extra_query, payload=encrypted_payload)


def with_retry(url: str, retry_count: int) -> str:
    """Tag a URL with the retry attempt number; attempt 0 leaves it as is."""
    if retry_count <= 0:
        return url
    items = [
        (key, value)
        for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True)
        if key != RETRY_KEY
    ]
    items.append((RETRY_KEY, str(retry_count)))
    return _with_query(url, items)


def join(base_url: str, path: str) -> str:
    """Join a service host and an endpoint path with a single slash."""
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class URLBuilder:
    """URL builder bound to one session."""

    def __init__(self, session: Session):
        self.session = session

    def build(self, base_url: str, extra_query: Optional[Mapping[str, Any]] = None) -> str:
        return build(base_url, extra_query, self.session)

    def build_with_payload(self, base_url: str, encrypted_payload: str,
                           extra_query: Optional[Mapping[str, Any]] = None) -> str:
        return build_with_payload(base_url, encrypted_payload, self.session, extra_query)
