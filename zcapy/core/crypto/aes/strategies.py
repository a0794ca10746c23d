"""AES cipher strategies using Strategy Pattern."""
from abc import ABC, abstractmethod
from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes
from Crypto.Util.Padding import pad, unpad

BLOCK_SIZE = 16


class AESStrategy(ABC):
    """
    Abstract base class for AES cipher strategies.

    A strategy turns plaintext into the raw bytes that get base64-encoded
    on the wire, and back. Failures raise ValueError.
    """

    name: str = ''

    @abstractmethod
    def encrypt(self, data: bytes, key: bytes) -> bytes:
        """Encrypts data using the strategy."""
        pass

    @abstractmethod
    def decrypt(self, data: bytes, key: bytes) -> bytes:
        """Decrypts data using the strategy."""
        pass


class AESGCMStrategy(AESStrategy):
    """
    AES-GCM with a fresh nonce per message.

    Layout: nonce (12) || ciphertext || tag (16).
    """

    name = 'aes-gcm'
    NONCE_SIZE = 12
    TAG_SIZE = 16

    def encrypt(self, data: bytes, key: bytes) -> bytes:
        """Encrypts and authenticates data."""
        nonce = get_random_bytes(self.NONCE_SIZE)
        cipher = AES.new(key, AES.MODE_GCM, nonce=nonce, mac_len=self.TAG_SIZE)
        ciphertext, tag = cipher.encrypt_and_digest(data)
        return nonce + ciphertext + tag

    def decrypt(self, data: bytes, key: bytes) -> bytes:
        """Verifies and decrypts data."""
        if len(data) < self.NONCE_SIZE + self.TAG_SIZE:
            raise ValueError("Ciphertext too short")
        nonce = data[:self.NONCE_SIZE]
        ciphertext = data[self.NONCE_SIZE:-self.TAG_SIZE]
        tag = data[-self.TAG_SIZE:]
        cipher = AES.new(key, AES.MODE_GCM, nonce=nonce, mac_len=self.TAG_SIZE)
        return cipher.decrypt_and_verify(ciphertext, tag)


class AESCBCStrategy(AESStrategy):
    """
    AES-CBC with PKCS#7 padding and a fresh IV per message.

    Layout: iv (16) || ciphertext.
    """

    name = 'aes-cbc'

    def encrypt(self, data: bytes, key: bytes) -> bytes:
        """Encrypts data using AES-CBC mode."""
        iv = get_random_bytes(BLOCK_SIZE)
        cipher = AES.new(key, AES.MODE_CBC, iv)
        return iv + cipher.encrypt(pad(data, BLOCK_SIZE))

    def decrypt(self, data: bytes, key: bytes) -> bytes:
        """Decrypts data using AES-CBC mode."""
        if len(data) < 2 * BLOCK_SIZE or len(data) % BLOCK_SIZE:
            raise ValueError("Ciphertext is not a whole number of blocks")
        iv, encrypted = data[:BLOCK_SIZE], data[BLOCK_SIZE:]
        cipher = AES.new(key, AES.MODE_CBC, iv)
        return unpad(cipher.decrypt(encrypted), BLOCK_SIZE)


class ZeroIVCBCStrategy(AESStrategy):
    """
    AES-CBC with an all-zero IV, as sent by the legacy web client.

    Deterministic: the same key and plaintext always give the same
    ciphertext. Use only where the remote side requires this layout.
    """

    name = 'aes-cbc-zero-iv'

    def __init__(self):
        self.iv = b'\0' * BLOCK_SIZE

    def encrypt(self, data: bytes, key: bytes) -> bytes:
        cipher = AES.new(key, AES.MODE_CBC, self.iv)
        return cipher.encrypt(pad(data, BLOCK_SIZE))

    def decrypt(self, data: bytes, key: bytes) -> bytes:
        if not data or len(data) % BLOCK_SIZE:
            raise ValueError("Ciphertext is not a whole number of blocks")
        cipher = AES.new(key, AES.MODE_CBC, self.iv)
        return unpad(cipher.decrypt(data), BLOCK_SIZE)


STRATEGIES = {
    strategy.name: strategy
    for strategy in (AESGCMStrategy, AESCBCStrategy, ZeroIVCBCStrategy)
}


def get_strategy(name: str) -> AESStrategy:
    """Instantiates a strategy by its configuration name."""
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown cipher '{name}', expected one of {sorted(STRATEGIES)}"
        ) from None
