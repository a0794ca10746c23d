"""
Async Zalo API client.

Runs the request pipeline for endpoint callers:

    resolve service -> encrypt params -> build URL -> send -> parse response
"""
from typing import Any, Mapping, Optional

from .config import APIConfig
from .request.request_builder import RequestBuilder
from .request.response_handler import ResponseHandler
from .request.url_builder import build, build_with_payload, join
from .service_resolver import must_resolve
from .transport import AsyncTransport, redact_url
from ..crypto.aes import ParamCipher, get_strategy
from ..exceptions import ZcaError
from ..logging import get_logger
from ..result import ApiResult
from ..session import Session, Credentials

METHODS = ('GET', 'POST')


class AsyncAPIClient:
    """
    Asynchronous Zalo API client.

    A missing service URL raises ServiceNotConfiguredError; every other
    failure comes back as an ApiResult error.

    Example:
        >>> async with AsyncAPIClient(session, credentials) as client:
        ...     result = await client.post(
        ...         'friend', '/api/friend/feed/block',
        ...         {'fid': user_id, 'isBlockFeed': 1, 'imei': credentials.imei}
        ...     )
        ...     data = result.unwrap()
    """

    def __init__(
        self,
        session: Session,
        credentials: Credentials,
        config: Optional[APIConfig] = None,
        transport: Optional[AsyncTransport] = None,
        cipher: Optional[ParamCipher] = None
    ):
        """
        Initialize API client.

        Args:
            session: Authenticated session
            credentials: Client identity
            config: API configuration (uses defaults if not provided)
            transport: HTTP transport; one is created from config if omitted
            cipher: Param cipher; defaults to the strategy named in config
        """
        self._session = session
        self._credentials = credentials
        self._config = config or APIConfig.default()
        self._cipher = cipher or ParamCipher(get_strategy(self._config.cipher))
        self._response_handler = ResponseHandler(self._cipher)
        self._transport = transport or AsyncTransport(self._config)
        self._owns_transport = transport is None
        self._logger = get_logger('zcapy.api')

    @property
    def session(self) -> Session:
        return self._session

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def cipher(self) -> ParamCipher:
        return self._cipher

    async def __aenter__(self) -> 'AsyncAPIClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Release the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()

    def encrypt_params(self, params: Mapping[str, Any]) -> ApiResult[str]:
        return self._cipher.encrypt(self._session.secret_key, params)

    def decrypt(self, ciphertext: str) -> ApiResult[Any]:
        return self._cipher.decrypt_json(self._session.secret_key, ciphertext)

    async def request(
        self,
        service: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        method: str = 'POST',
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> ApiResult[Any]:
        """
        Run one API call through the pipeline.

        GET calls carry the encrypted params in the URL; POST calls send
        them as a form field.

        Args:
            service: Logical service name (e.g. 'friend', 'group')
            path: Endpoint path appended to the service host
            params: Parameter map to encrypt, or None for no payload
            method: 'GET' or 'POST'
            query: Extra query parameters
            headers: Extra request headers

        Returns:
            ApiResult with the decoded payload or a typed error

        Raises:
            ServiceNotConfiguredError: If the session has no URL for service
        """
        method = method.upper() if isinstance(method, str) else method
        if method not in METHODS:
            return ApiResult.failure(
                ZcaError.invalid_input(f"method must be one of: {', '.join(METHODS)}")
            )

        base_url = join(must_resolve(self._session, service), path)

        encrypted = None
        if params is not None:
            encryption = self.encrypt_params(params)
            if not encryption.ok:
                return encryption
            encrypted = encryption.value

        if method == 'GET':
            if encrypted is None:
                url = build(base_url, query, self._session)
            else:
                url = build_with_payload(base_url, encrypted, self._session, query)
            self._logger.debug("Calling %s %s", method, redact_url(url))
            response = await self._transport.get(
                self._credentials, url, headers=headers
            )
        else:
            url = build(base_url, query, self._session)
            body = RequestBuilder.build_params_body(encrypted) if encrypted is not None else ''
            self._logger.debug("Calling %s %s", method, url)
            response = await self._transport.post(
                self._credentials, url, body, headers=headers
            )

        result = self._response_handler.parse(response, self._session.secret_key)
        if not result.ok:
            self._logger.info("%s %s failed: %s", service, path, result.error)
        return result

    async def get(self, service: str, path: str, params: Optional[Mapping[str, Any]] = None,
                  **kwargs) -> ApiResult[Any]:
        """GET call with params in the URL."""
        return await self.request(service, path, params, method='GET', **kwargs)

    async def post(self, service: str, path: str, params: Optional[Mapping[str, Any]] = None,
                   **kwargs) -> ApiResult[Any]:
        """POST call with params in the body."""
        return await self.request(service, path, params, method='POST', **kwargs)
