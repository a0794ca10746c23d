"""Key management utilities."""
from typing import Union

from .encoding import Base64Encoder

AES_KEY_SIZES = (16, 24, 32)

KEY_FORMAT_BASE64 = 'base64'
KEY_FORMAT_UTF8 = 'utf8'
KEY_FORMATS = (KEY_FORMAT_BASE64, KEY_FORMAT_UTF8)


class KeyManager:
    """
    Turns key material into raw AES keys.

    Session keys (zpw_enk) are kept base64-encoded. The login and QR flows
    instead use a plain 32-character string whose UTF-8 bytes are the key;
    build the manager with key_format='utf8' for those.
    """

    def __init__(self, key_format: str = KEY_FORMAT_BASE64):
        if key_format not in KEY_FORMATS:
            raise ValueError(f"Unknown key format '{key_format}', expected one of {KEY_FORMATS}")
        self.key_format = key_format

    def load(self, key: Union[str, bytes]) -> bytes:
        """Prepares a key according to this manager's key format."""
        if self.key_format == KEY_FORMAT_UTF8 and isinstance(key, str):
            return KeyManager.prepare(key.encode('utf-8'))
        return KeyManager.prepare(key)

    @staticmethod
    def prepare(key: Union[str, bytes]) -> bytes:
        """
        Prepares a key, decoding the base64 form kept at rest.

        Raises:
            ValueError: If the key cannot be decoded or is not a valid
                AES key length.
        """
        if isinstance(key, str):
            key = Base64Encoder.decode(key)
        if not isinstance(key, (bytes, bytearray)):
            raise ValueError(f"Unsupported key type: {type(key).__name__}")
        if len(key) not in AES_KEY_SIZES:
            raise ValueError(
                f"Invalid key length {len(key)}, expected one of {AES_KEY_SIZES}"
            )
        return bytes(key)

    @staticmethod
    def is_valid(key: Union[str, bytes]) -> bool:
        """Checks whether the key would be accepted by prepare()."""
        try:
            KeyManager.prepare(key)
        except ValueError:
            return False
        return True
