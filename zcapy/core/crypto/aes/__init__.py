"""
AES cipher module using Strategy Pattern.
"""
from .strategies import (
    AESStrategy,
    AESGCMStrategy,
    AESCBCStrategy,
    ZeroIVCBCStrategy,
    STRATEGIES,
    get_strategy,
)
from .param_cipher import ParamCipher, serialize_params

__all__ = [
    'AESStrategy',
    'AESGCMStrategy',
    'AESCBCStrategy',
    'ZeroIVCBCStrategy',
    'STRATEGIES',
    'get_strategy',
    'ParamCipher',
    'serialize_params',
]
