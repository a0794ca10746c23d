"""Crypto module: key handling, param encryption and request signing."""
from .utils import Base64Encoder, KeyManager
from .aes import (
    AESStrategy,
    AESGCMStrategy,
    AESCBCStrategy,
    ZeroIVCBCStrategy,
    ParamCipher,
    get_strategy,
)
from .hashing import sign_key, md5_hex

__all__ = [
    'Base64Encoder',
    'KeyManager',
    'AESStrategy',
    'AESGCMStrategy',
    'AESCBCStrategy',
    'ZeroIVCBCStrategy',
    'ParamCipher',
    'get_strategy',
    'sign_key',
    'md5_hex',
]
