"""Encoding utilities."""
import base64
import binascii


class Base64Encoder:
    """Standard Base64 encoder/decoder used on the wire."""

    @staticmethod
    def encode(data: bytes) -> str:
        """Encodes bytes to standard Base64 with padding."""
        return base64.b64encode(data).decode('ascii')

    @staticmethod
    def decode(data: str) -> bytes:
        """
        Decodes standard Base64.

        Missing padding is tolerated; any other malformed input raises
        ValueError.
        """
        if isinstance(data, bytes):
            data = data.decode('ascii')
        data = data.strip()
        padding = len(data) % 4
        if padding:
            data += '=' * (4 - padding)
        try:
            return base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 data: {e}") from e
