"""
Hashing utilities.
"""
from .sign_key import sign_key, md5_hex

__all__ = [
    'sign_key',
    'md5_hex',
]
