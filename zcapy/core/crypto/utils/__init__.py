"""Shared utilities for the crypto module."""
from .encoding import Base64Encoder
from .key_utils import KeyManager, AES_KEY_SIZES, KEY_FORMATS

__all__ = [
    'Base64Encoder',
    'KeyManager',
    'AES_KEY_SIZES',
    'KEY_FORMATS',
]
