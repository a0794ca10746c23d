"""
Response handler for API responses.

A Zalo response is a JSON envelope:

    {"error_code": 0, "error_message": "...", "data": "<encrypted>"}

The data field is encrypted with the session key. Once decrypted it may
carry its own error_code, so errors are checked on both levels. The
success payload is returned as decoded; field names keep whatever casing
the server used.
"""
import json
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

from ...crypto.aes.param_cipher import ParamCipher
from ...exceptions import ZcaError, ErrorCodes
from ...logging import get_logger
from ...result import ApiResult

logger = get_logger('zcapy.api')

ERROR_CODE_KEYS = ('error_code', 'errorCode')
ERROR_MESSAGE_KEYS = ('error_message', 'errorMessage')
DEFAULT_ERROR_MESSAGE = 'Unknown error'


@dataclass(frozen=True)
class HttpResponse:
    """
    Raw HTTP response as returned by the transport.

    Headers are kept as ordered (name, value) pairs so repeated headers
    such as Set-Cookie keep every value.
    """
    status: int
    body: Union[bytes, str] = b''
    headers: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        headers = self.headers
        if hasattr(headers, 'items'):
            headers = headers.items()
        object.__setattr__(
            self, 'headers', tuple((str(k), str(v)) for k, v in headers)
        )

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """First value of a header, matched case-insensitively."""
        values = self.get_all(name)
        return values[0] if values else default

    def get_all(self, name: str) -> List[str]:
        """Every value of a header, in the order received."""
        name = name.lower()
        return [value for key, value in self.headers if key.lower() == name]

    @property
    def set_cookies(self) -> List[str]:
        return self.get_all('Set-Cookie')

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode('utf-8')
        return self.body


def _error_indicator(value: Any) -> Optional[Union[int, str]]:
    """Turns an error_code value into an error code, or None for success."""
    if value is None or value is False:
        return None
    if value is True:
        return ErrorCodes.REMOTE_ERROR
    if isinstance(value, int):
        return value or None
    if isinstance(value, float):
        if not value:
            return None
        # NaN, infinities and fractions are not server codes.
        if not math.isfinite(value) or not value.is_integer():
            return ErrorCodes.REMOTE_ERROR
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = int(text)
        except ValueError:
            return text
        return number or None
    return ErrorCodes.REMOTE_ERROR


class ResponseHandler:
    """Decodes API responses into payloads or typed errors."""

    def __init__(self, cipher: Optional[ParamCipher] = None):
        self.cipher = cipher or ParamCipher()

    @staticmethod
    def check_error(envelope: Any) -> Optional[ZcaError]:
        """
        Checks an envelope for an error indicator.

        Returns:
            ZcaError if the envelope reports a failure, None otherwise
        """
        if not isinstance(envelope, Mapping):
            return None

        for key in ERROR_CODE_KEYS:
            if key in envelope:
                code = _error_indicator(envelope[key])
                break
        else:
            return None

        if code is None:
            return None

        message = DEFAULT_ERROR_MESSAGE
        for key in ERROR_MESSAGE_KEYS:
            value = envelope.get(key)
            if isinstance(value, str) and value:
                message = value
                break

        return ZcaError.api(code, message)

    @staticmethod
    def parse_json(response: HttpResponse) -> ApiResult[Any]:
        """Parses the response body as JSON."""
        try:
            return ApiResult.success(json.loads(response.text()))
        except ValueError as e:
            return ApiResult.failure(ZcaError.api(
                ErrorCodes.INVALID_RESPONSE,
                "Failed to decode JSON response",
                reason=e
            ))

    @staticmethod
    def extract_data(envelope: Any) -> Any:
        """Unwraps the data field when there is one."""
        if isinstance(envelope, Mapping) and 'data' in envelope:
            return envelope['data']
        return envelope

    @classmethod
    def status_error(cls, response: HttpResponse) -> ZcaError:
        """
        Error for a non-2xx response.

        A body that decodes to an error envelope wins; otherwise the
        status code is reported as a network error.
        """
        try:
            body = json.loads(response.text())
        except ValueError:
            body = None
        error = cls.check_error(body)
        if error is not None:
            return error
        return ZcaError.network(
            ErrorCodes.HTTP_ERROR,
            f"HTTP request failed with status {response.status}",
            details={'status': response.status}
        )

    def decrypt_data(self, envelope: Any, secret_key: Union[str, bytes]) -> ApiResult[Any]:
        """Decrypts the data field; clear-text data passes through."""
        if not isinstance(envelope, Mapping) or 'data' not in envelope:
            return ApiResult.success(envelope)

        data = envelope['data']
        if not isinstance(data, str):
            return ApiResult.success(data)
        return self.cipher.decrypt_json(secret_key, data)

    def parse(self, response: Union[HttpResponse, ApiResult], secret_key: Union[str, bytes]) -> ApiResult[Any]:
        """
        Parses and decrypts an API response.

        Args:
            response: Raw response, or the transport's result wrapping one
            secret_key: Session key used to decrypt the data field

        Returns:
            ApiResult with the decoded payload or a typed error
        """
        if isinstance(response, ApiResult):
            if not response.ok:
                return response
            response = response.value

        if not response.is_success:
            error = self.status_error(response)
            logger.debug("Request failed: %s", error)
            return ApiResult.failure(error)

        envelope = self.parse_json(response)
        if not envelope.ok:
            return envelope

        error = self.check_error(envelope.value)
        if error is not None:
            logger.debug("API error: %s", error)
            return ApiResult.failure(error)

        data = self.decrypt_data(envelope.value, secret_key)
        if not data.ok:
            logger.warning("Failed to decrypt response data: %s", data.error.message)
            return data

        error = self.check_error(data.value)
        if error is not None:
            logger.debug("API error: %s", error)
            return ApiResult.failure(error)

        return ApiResult.success(self.extract_data(data.value))

    def parse_unencrypted(self, response: Union[HttpResponse, ApiResult]) -> ApiResult[Any]:
        """Parses a response whose data field is sent in clear text."""
        if isinstance(response, ApiResult):
            if not response.ok:
                return response
            response = response.value

        if not response.is_success:
            return ApiResult.failure(self.status_error(response))

        envelope = self.parse_json(response)
        if not envelope.ok:
            return envelope

        error = self.check_error(envelope.value)
        if error is not None:
            return ApiResult.failure(error)

        return ApiResult.success(self.extract_data(envelope.value))


def parse(response: Union[HttpResponse, ApiResult], secret_key: Union[str, bytes],
          cipher: Optional[ParamCipher] = None) -> ApiResult[Any]:
    """Parses a response with a one-off handler."""
    return ResponseHandler(cipher).parse(response, secret_key)
