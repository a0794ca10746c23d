"""
Async HTTP transport.

The only component that performs I/O. It attaches the client identity
(user agent, cookies, browser headers) to each request and reports
transport failures as network errors. Timeouts come from TimeoutConfig;
retries are left to callers.
"""
import asyncio
import re
from typing import Any, Mapping, Optional, Union

import aiohttp

from .config import APIConfig
from .request.header_builder import HeaderBuilder
from .request.request_builder import RequestBuilder, FORM_CONTENT_TYPE
from .request.response_handler import HttpResponse
from ..exceptions import ZcaError, ErrorCodes
from ..logging import get_logger
from ..result import ApiResult
from ..session import Credentials

_PARAMS_VALUE = re.compile(r'([?&]params=)[^&]*')


def redact_url(url: str) -> str:
    """Hide the encrypted payload of a URL for logging."""
    return _PARAMS_VALUE.sub(r'\1***', url)


class AsyncTransport:
    """
    aiohttp-based transport.

    Example:
        >>> async with AsyncTransport() as transport:
        ...     result = await transport.post(credentials, url, body)
    """

    def __init__(self, config: Optional[APIConfig] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize transport.

        Args:
            config: API configuration (uses defaults if not provided)
            session: Existing aiohttp session; it is not closed by close()
        """
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = session is None
        self._headers = HeaderBuilder(self._config.origin, self._config.extra_headers)
        self._logger = get_logger('zcapy.transport')

    @property
    def config(self) -> APIConfig:
        return self._config

    async def __aenter__(self) -> 'AsyncTransport':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(**self._config.get_connector_kwargs())
            self._session = aiohttp.ClientSession(
                connector=connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the session if this transport created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def build_headers(self, identity: Credentials, user_agent: Optional[str] = None,
                      headers: Optional[Mapping[str, str]] = None) -> dict:
        return self._headers.build(
            user_agent or identity.user_agent or self._config.user_agent,
            cookie=identity.cookie_header(),
            headers=headers
        )

    async def request(
        self,
        method: str,
        identity: Credentials,
        url: str,
        body: Optional[Union[str, bytes]] = None,
        user_agent: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> ApiResult[HttpResponse]:
        """
        Send one request.

        Returns:
            ApiResult with the HttpResponse (any status), or a
            network/request_failed error when no response was received
        """
        session = await self._ensure_session()
        request_headers = self.build_headers(identity, user_agent, headers)

        self._logger.debug("%s %s", method, redact_url(url))
        try:
            async with session.request(
                method,
                url,
                data=body,
                headers=request_headers,
                proxy=self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
            ) as response:
                content = await response.read()
                self._logger.debug("%s %s -> %d", method, redact_url(url), response.status)
                return ApiResult.success(HttpResponse(
                    status=response.status,
                    body=content,
                    headers=tuple(response.headers.items())
                ))
        except asyncio.TimeoutError as e:
            self._logger.warning("%s %s timed out", method, redact_url(url))
            return ApiResult.failure(ZcaError.network(
                ErrorCodes.REQUEST_FAILED, "Request failed: timeout", reason=e
            ))
        except aiohttp.ClientError as e:
            self._logger.warning("%s %s failed: %s", method, redact_url(url), e)
            return ApiResult.failure(ZcaError.network(
                ErrorCodes.REQUEST_FAILED, f"Request failed: {e}", reason=e
            ))

    async def get(self, identity: Credentials, url: str, user_agent: Optional[str] = None,
                  headers: Optional[Mapping[str, str]] = None) -> ApiResult[HttpResponse]:
        """GET request."""
        return await self.request('GET', identity, url, user_agent=user_agent, headers=headers)

    async def post(self, identity: Credentials, url: str, body: Union[str, bytes],
                   user_agent: Optional[str] = None,
                   headers: Optional[Mapping[str, str]] = None) -> ApiResult[HttpResponse]:
        """POST a form-encoded body."""
        post_headers = {'Content-Type': FORM_CONTENT_TYPE, **(headers or {})}
        return await self.request('POST', identity, url, body, user_agent, post_headers)

    async def post_form(self, identity: Credentials, url: str, fields: Mapping[str, Any],
                        user_agent: Optional[str] = None,
                        headers: Optional[Mapping[str, str]] = None) -> ApiResult[HttpResponse]:
        """POST with a body built from a field map."""
        body = RequestBuilder.build_form_body(fields)
        return await self.post(identity, url, body, user_agent, headers)
