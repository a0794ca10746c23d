"""
Parameter encryption for API requests.

Serializes a parameter map to JSON and encrypts it under the session's
secret key; decrypts server payloads encrypted the same way.
"""
import binascii
import json
from typing import Any, Mapping, Optional, Union
from urllib.parse import unquote

from .strategies import AESStrategy, AESGCMStrategy, ZeroIVCBCStrategy
from ..utils.encoding import Base64Encoder
from ..utils.key_utils import KeyManager, KEY_FORMAT_UTF8
from ...exceptions import ZcaError, ErrorCodes
from ...logging import get_logger
from ...result import ApiResult

logger = get_logger('zcapy.crypto')

Params = Union[Mapping[str, Any], str]

OUTPUT_FORMATS = ('base64', 'hex')


def serialize_params(params: Mapping[str, Any]) -> str:
    """
    Serializes params to compact JSON, keeping the caller's key order.

    Raises:
        TypeError, ValueError: If a value is not JSON-representable.
    """
    return json.dumps(params, separators=(',', ':'), ensure_ascii=False, allow_nan=False)


class ParamCipher:
    """
    Encrypts request params and decrypts responses.

    The cipher itself is pluggable; the default is AES-GCM with a fresh
    nonce per call, so two encryptions of the same params never match.

    Example:
        >>> cipher = ParamCipher()
        >>> encrypted = cipher.encrypt(session.secret_key, {'fid': '123'}).unwrap()
        >>> cipher.decrypt_json(session.secret_key, encrypted).unwrap()
        {'fid': '123'}
    """

    def __init__(self, strategy: Optional[AESStrategy] = None,
                 key_manager: KeyManager = None,
                 output_format: str = 'base64',
                 uppercase: bool = False):
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format '{output_format}', expected one of {OUTPUT_FORMATS}"
            )
        self.strategy = strategy or AESGCMStrategy()
        self.key_manager = key_manager or KeyManager()
        self.output_format = output_format
        self.uppercase = uppercase

    @classmethod
    def for_utf8_key(cls, output_format: str = 'base64', uppercase: bool = False) -> 'ParamCipher':
        """
        Cipher for the login and QR flows.

        These use a plain 32-character key string with zero-IV AES-CBC,
        and some endpoints expect hex output.
        """
        return cls(
            ZeroIVCBCStrategy(),
            KeyManager(KEY_FORMAT_UTF8),
            output_format=output_format,
            uppercase=uppercase
        )

    def _encode(self, raw: bytes) -> str:
        if self.output_format == 'hex':
            encoded = raw.hex()
        else:
            encoded = Base64Encoder.encode(raw)
        return encoded.upper() if self.uppercase else encoded

    def _decode(self, text: Union[str, bytes]) -> bytes:
        if isinstance(text, bytes):
            text = text.decode('ascii')
        # Some responses arrive percent-encoded.
        text = unquote(text)
        if self.output_format == 'hex':
            try:
                return binascii.unhexlify(text.strip())
            except binascii.Error as e:
                raise ValueError(f"Invalid hex data: {e}") from e
        return Base64Encoder.decode(text)

    def encrypt(self, secret_key: Union[str, bytes], params: Params) -> ApiResult[str]:
        """
        Encrypts params into a base64 string.

        Args:
            secret_key: Session key, base64 string or raw bytes
            params: Parameter map, or an already serialized string

        Returns:
            ApiResult holding the ciphertext string
        """
        if isinstance(params, Mapping):
            try:
                plaintext = serialize_params(params)
            except (TypeError, ValueError) as e:
                return ApiResult.failure(ZcaError.security(
                    ErrorCodes.ENCRYPTION_FAILED,
                    f"Failed to encode params: {e}",
                    reason=e
                ))
        elif isinstance(params, str):
            plaintext = params
        else:
            return ApiResult.failure(ZcaError.invalid_input(
                f"params must be a mapping or string, got {type(params).__name__}"
            ))

        if not plaintext:
            return ApiResult.failure(ZcaError.security(
                ErrorCodes.ENCRYPTION_FAILED, "Nothing to encrypt"
            ))

        try:
            key = self.key_manager.load(secret_key)
            encrypted = self.strategy.encrypt(plaintext.encode('utf-8'), key)
        except ValueError as e:
            logger.debug("Param encryption failed: %s", e)
            return ApiResult.failure(ZcaError.security(
                ErrorCodes.ENCRYPTION_FAILED,
                f"Failed to encrypt params: {e}",
                reason=e
            ))

        return ApiResult.success(self._encode(encrypted))

    def decrypt(self, secret_key: Union[str, bytes], ciphertext: str) -> ApiResult[bytes]:
        """
        Decrypts a base64 ciphertext string.

        Malformed input, a wrong key or tampered data yield a security
        error; partially decrypted data is never returned.
        """
        if not isinstance(ciphertext, (str, bytes)) or not ciphertext:
            return ApiResult.failure(ZcaError.security(
                ErrorCodes.DECRYPTION_FAILED, "Decryption failed: empty ciphertext"
            ))

        try:
            key = self.key_manager.load(secret_key)
            raw = self._decode(ciphertext)
            plaintext = self.strategy.decrypt(raw, key)
        except (ValueError, KeyError) as e:
            logger.debug("Decryption failed with %s: %s", self.strategy.name, e)
            return ApiResult.failure(ZcaError.security(
                ErrorCodes.DECRYPTION_FAILED,
                f"Decryption failed: {e}",
                reason=e
            ))

        return ApiResult.success(plaintext)

    def decrypt_json(self, secret_key: Union[str, bytes], ciphertext: str) -> ApiResult[Any]:
        """
        Decrypts and parses JSON.

        Plaintext that is not JSON is returned as text, since some
        endpoints answer with a bare string.
        """
        result = self.decrypt(secret_key, ciphertext)
        if not result.ok:
            return result

        try:
            text = result.value.decode('utf-8')
        except UnicodeDecodeError as e:
            return ApiResult.failure(ZcaError.security(
                ErrorCodes.DECRYPTION_FAILED,
                "Decryption failed: plaintext is not valid UTF-8",
                reason=e
            ))

        try:
            return ApiResult.success(json.loads(text))
        except ValueError:
            return ApiResult.success(text)
