"""
Client configuration.

One APIConfig describes how a client talks to Zalo: which protocol
version and type new sessions default to, which param cipher is used,
the browser identity it presents and the aiohttp connection settings.
"""
from dataclasses import dataclass, field, fields
from typing import Optional, Dict, Any, Mapping, Union
from urllib.parse import quote, urlsplit
import ssl

import aiohttp

from ..crypto.aes import STRATEGIES
from ..crypto.utils import Base64Encoder
from ..exceptions import ZcaError
from ..session import (
    Session, Credentials, DEFAULT_API_TYPE, DEFAULT_API_VERSION, DEFAULT_LANGUAGE
)
from .request.header_builder import DEFAULT_ORIGIN

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36'
)


@dataclass
class ProxyConfig:
    """HTTP(S) proxy, optionally with credentials."""
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_url(cls, url: str) -> 'ProxyConfig':
        """Split credentials embedded in a proxy URL."""
        parts = urlsplit(url)
        if parts.username is None:
            return cls(url=url)
        host = parts.hostname or ''
        if parts.port:
            host = f"{host}:{parts.port}"
        return cls(
            url=f"{parts.scheme}://{host}{parts.path}",
            username=parts.username,
            password=parts.password
        )

    def to_aiohttp_proxy(self) -> Optional[str]:
        if not self.url:
            return None
        if not (self.username and self.password and '://' in self.url):
            return self.url

        scheme, rest = self.url.split('://', 1)
        auth = f"{quote(self.username, safe='')}:{quote(self.password, safe='')}"
        return f"{scheme}://{auth}@{rest}"


@dataclass
class SSLConfig:
    verify: bool = True
    ca_file: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """SSL context for the connector; False turns verification off."""
        if not self.verify:
            return False

        context = ssl.create_default_context(cafile=self.ca_file)
        if self.cert_file:
            context.load_cert_chain(self.cert_file, keyfile=self.key_file)
        context.check_hostname = self.check_hostname
        return context


@dataclass
class TimeoutConfig:
    """
    Transport timeouts in seconds.

    Zalo calls are small JSON round trips, so the limits are much
    shorter than a file-transfer client would use.
    """
    total: float = 60.0
    connect: float = 15.0
    sock_read: float = 30.0
    sock_connect: float = 15.0

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class APIConfig:
    """
    Complete client configuration.

    Protocol defaults (api_type, api_version, language) apply to sessions
    and credentials created through new_session() and new_credentials().
    """
    # Protocol
    api_type: int = DEFAULT_API_TYPE
    api_version: int = DEFAULT_API_VERSION
    language: str = DEFAULT_LANGUAGE

    # Param cipher strategy name, one of crypto.aes.STRATEGIES
    cipher: str = 'aes-gcm'

    # Browser identity
    user_agent: str = DEFAULT_USER_AGENT
    origin: str = DEFAULT_ORIGIN
    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Transport
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    limit_per_host: int = 10
    limit: int = 100

    def __post_init__(self):
        if self.cipher not in STRATEGIES:
            raise ZcaError.invalid_input(
                f"cipher must be one of: {', '.join(sorted(STRATEGIES))}"
            )
        if isinstance(self.proxy, str):
            self.proxy = ProxyConfig.from_url(self.proxy)

    @classmethod
    def default(cls) -> 'APIConfig':
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Configuration routed through a proxy; credentials may be in the URL."""
        return cls(proxy=ProxyConfig.from_url(proxy_url), **kwargs)

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Configuration with certificate verification disabled."""
        return cls(ssl=SSLConfig(verify=False, check_hostname=False), **kwargs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'APIConfig':
        """
        Build a configuration from plain data, e.g. a parsed JSON file.

        Unknown keys are ignored; 'timeout' may be a number (total seconds)
        or a mapping of TimeoutConfig fields.
        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}

        timeout = values.get('timeout')
        if isinstance(timeout, (int, float)):
            values['timeout'] = TimeoutConfig(total=float(timeout))
        elif isinstance(timeout, Mapping):
            values['timeout'] = TimeoutConfig(**timeout)

        ssl_config = values.get('ssl')
        if isinstance(ssl_config, bool):
            values['ssl'] = SSLConfig(verify=ssl_config, check_hostname=ssl_config)
        elif isinstance(ssl_config, Mapping):
            values['ssl'] = SSLConfig(**ssl_config)

        return cls(**values)

    def new_session(self, uid: str, secret_key: Union[str, bytes],
                    zpw_service_map: Optional[Mapping[str, Any]] = None) -> Session:
        """
        Session stamped with this configuration's protocol values.

        A raw key is stored in its base64 form.
        """
        if isinstance(secret_key, (bytes, bytearray)):
            secret_key = Base64Encoder.encode(bytes(secret_key))
        return Session(
            uid=uid,
            secret_key=secret_key,
            zpw_service_map=zpw_service_map or {},
            api_type=self.api_type,
            api_version=self.api_version
        )

    def new_credentials(self, imei: str, cookies: Any = (),
                        user_agent: Optional[str] = None) -> Credentials:
        """Credentials falling back to the configured user agent and language."""
        return Credentials(
            imei=imei,
            user_agent=user_agent or self.user_agent,
            cookies=cookies,
            language=self.language
        )

    def get_connector_kwargs(self) -> Dict[str, Any]:
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        # Headers are per request; see HeaderBuilder.
        return {
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
