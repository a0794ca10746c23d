"""
Session data models.

Contains the immutable values needed to address, sign and encrypt a
request: the per-login Session and the per-client Credentials.
"""
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from Crypto.Random import get_random_bytes

from ..crypto.utils.encoding import Base64Encoder
from ..crypto.utils.key_utils import KeyManager
from ..exceptions import ZcaError

DEFAULT_API_TYPE = 30
DEFAULT_API_VERSION = 645
DEFAULT_LANGUAGE = 'vi'

ServiceMapInput = Mapping[str, Union[str, Iterable[str], None]]
CookiePair = Tuple[str, str]


def _get_field(data: Mapping[str, Any], key: str) -> Any:
    return data.get(key)


def _require_field(data: Mapping[str, Any], key: str, owner: str) -> Any:
    value = _get_field(data, key)
    if value is None:
        raise ZcaError.invalid_input(f"Invalid {owner}: missing required field '{key}'")
    return value


def normalize_service_map(service_map: Optional[ServiceMapInput]) -> Mapping[str, Tuple[str, ...]]:
    """
    Normalizes a service map to name -> tuple of candidate hosts.

    A bare string becomes a one-element tuple; empty entries are dropped.
    """
    if service_map is None:
        service_map = {}
    if not isinstance(service_map, Mapping):
        raise ZcaError.invalid_input("zpw_service_map must be a mapping")

    normalized: Dict[str, Tuple[str, ...]] = {}
    for name, hosts in service_map.items():
        if isinstance(hosts, str):
            candidates = (hosts,) if hosts else ()
        elif hosts is None:
            candidates = ()
        elif isinstance(hosts, (list, tuple)):
            if not all(h is None or isinstance(h, str) for h in hosts):
                raise ZcaError.invalid_input(
                    f"zpw_service_map['{name}'] must hold host strings"
                )
            candidates = tuple(h for h in hosts if h)
        else:
            raise ZcaError.invalid_input(
                f"zpw_service_map['{name}'] must be a string or a list of strings"
            )
        if candidates:
            normalized[str(name)] = candidates
    return MappingProxyType(normalized)


@dataclass(frozen=True)
class Session:
    """
    Authenticated session context for one Zalo account.

    Held immutably for the lifetime of a client; use replace() to derive
    an updated session.

    Attributes:
        uid: Account identifier
        secret_key: Base64-encoded AES key (zpw_enk)
        zpw_service_map: Service name -> candidate base hosts
        api_type: Protocol discriminator sent as zpw_type
        api_version: Protocol version sent as zpw_ver
    """
    uid: str
    secret_key: str
    zpw_service_map: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    api_type: int = DEFAULT_API_TYPE
    api_version: int = DEFAULT_API_VERSION

    def __post_init__(self):
        if not isinstance(self.uid, str) or not self.uid:
            raise ZcaError.invalid_input("uid must be a non-empty string")
        if not isinstance(self.secret_key, str):
            raise ZcaError.invalid_input("secret_key must be a base64 string")
        try:
            KeyManager.prepare(self.secret_key)
        except ValueError as e:
            raise ZcaError.invalid_input(f"Invalid secret_key: {e}", reason=e) from e
        for name in ('api_type', 'api_version'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ZcaError.invalid_input(f"{name} must be an integer")
        object.__setattr__(
            self, 'zpw_service_map', normalize_service_map(self.zpw_service_map)
        )

    def __hash__(self) -> int:
        # The service map is a read-only proxy and cannot be hashed.
        return hash((self.uid, self.secret_key, self.api_type, self.api_version))

    @property
    def key_bytes(self) -> bytes:
        """Decoded secret key."""
        return KeyManager.prepare(self.secret_key)

    def replace(self, **changes) -> 'Session':
        """Return a new session with the given fields changed."""
        return replace(self, **changes)

    @classmethod
    def from_login_response(cls, data: Mapping[str, Any], **overrides) -> 'Session':
        """
        Create a session from the login payload.

        Args:
            data: Decoded login response data
            **overrides: Field values taking precedence (e.g. api_version)
        """
        uid = _require_field(data, 'uid', 'login response')
        secret_key = _require_field(data, 'zpw_enk', 'login response')
        values = {
            'uid': str(uid),
            'secret_key': secret_key,
            'zpw_service_map': _get_field(data, 'zpw_service_map_v3') or {},
        }
        values.update(overrides)
        return cls(**values)

    def to_dict(self, include_sensitive: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization.

        The secret key is left out unless include_sensitive is set.
        """
        data = {
            'uid': self.uid,
            'zpw_service_map': {
                name: list(hosts) for name, hosts in self.zpw_service_map.items()
            },
            'api_type': self.api_type,
            'api_version': self.api_version,
        }
        if include_sensitive:
            data['secret_key'] = self.secret_key
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Session':
        """
        Create from dictionary.

        Raises:
            ZcaError: If a required field is missing or invalid
        """
        api_type = _get_field(data, 'api_type')
        api_version = _get_field(data, 'api_version')
        return cls(
            uid=str(_require_field(data, 'uid', 'session map')),
            secret_key=_require_field(data, 'secret_key', 'session map'),
            zpw_service_map=_require_field(data, 'zpw_service_map', 'session map'),
            api_type=DEFAULT_API_TYPE if api_type is None else api_type,
            api_version=DEFAULT_API_VERSION if api_version is None else api_version,
        )


def parse_cookie_string(cookie_string: str) -> Tuple[CookiePair, ...]:
    """Parses a 'name=value; other=value' header into ordered pairs."""
    pairs: List[CookiePair] = []
    for part in cookie_string.split(';'):
        part = part.strip()
        if not part:
            continue
        name, _, value = part.partition('=')
        pairs.append((name.strip(), value.strip()))
    return tuple(pairs)


def normalize_cookies(cookies: Any) -> Tuple[CookiePair, ...]:
    """
    Normalizes the cookie formats found in exported credentials.

    Accepts a header string, a list of {'name', 'value'} dicts (browser
    export), a {'cookies': [...]} wrapper, a name -> value mapping, or a
    sequence of pairs.
    """
    if cookies is None:
        return ()
    if isinstance(cookies, str):
        return parse_cookie_string(cookies)
    if isinstance(cookies, Mapping):
        if isinstance(cookies.get('cookies'), list):
            return normalize_cookies(cookies['cookies'])
        if 'name' in cookies:
            return ((str(cookies['name']), str(cookies.get('value', ''))),)
        return tuple((str(k), str(v)) for k, v in cookies.items())

    if not isinstance(cookies, (list, tuple)):
        raise ZcaError.invalid_input(
            f"Unsupported cookies type: {type(cookies).__name__}"
        )

    pairs: List[CookiePair] = []
    for item in cookies:
        if isinstance(item, Mapping):
            if 'name' not in item:
                raise ZcaError.invalid_input("Cookie entry is missing 'name'")
            pairs.append((str(item['name']), str(item.get('value', ''))))
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            name, value = item
            pairs.append((str(name), str(value)))
        else:
            raise ZcaError.invalid_input(
                "Cookie entries must be {'name', 'value'} mappings or (name, value) pairs"
            )
    return tuple(pairs)


@dataclass(frozen=True)
class Credentials:
    """
    Device and client identity attached to every request.

    Attributes:
        imei: Device identifier (non-empty)
        user_agent: Browser user agent string
        cookies: Ordered (name, value) cookie pairs
        language: Client language
    """
    imei: str
    user_agent: str
    cookies: Tuple[CookiePair, ...] = ()
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self):
        if not isinstance(self.imei, str) or not self.imei:
            raise ZcaError.invalid_input("imei must be a non-empty string")
        if not isinstance(self.user_agent, str):
            raise ZcaError.invalid_input("user_agent must be a string")
        object.__setattr__(self, 'cookies', normalize_cookies(self.cookies))
        if not self.language:
            object.__setattr__(self, 'language', DEFAULT_LANGUAGE)

    def cookie_header(self) -> str:
        """Render cookies as a Cookie header value."""
        return '; '.join(f"{name}={value}" for name, value in self.cookies)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Credentials':
        """
        Create from dictionary.

        'cookie' is accepted as an alias of 'cookies'.
        """
        cookies = _get_field(data, 'cookies')
        if cookies is None:
            cookies = _get_field(data, 'cookie')
        if cookies is None:
            raise ZcaError.invalid_input("Invalid credentials map: missing required field 'cookies'")
        return cls(
            imei=_require_field(data, 'imei', 'credentials map'),
            user_agent=_require_field(data, 'user_agent', 'credentials map'),
            cookies=cookies,
            language=_get_field(data, 'language') or DEFAULT_LANGUAGE,
        )

    def to_dict(self, include_sensitive: bool = False) -> Dict[str, Any]:
        """Convert to dictionary; cookies are sensitive."""
        data = {
            'imei': self.imei,
            'user_agent': self.user_agent,
            'language': self.language,
        }
        if include_sensitive:
            data['cookies'] = [
                {'name': name, 'value': value} for name, value in self.cookies
            ]
        return data


def generate_secret_key(size: int = 32) -> str:
    """Random base64 key, for tests and offline tooling."""
    return Base64Encoder.encode(get_random_bytes(size))
