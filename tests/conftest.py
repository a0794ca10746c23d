"""Pytest fixtures for zcapy tests."""
import json

import pytest
from Crypto.Random import get_random_bytes

from zcapy.core.crypto.aes import ParamCipher
from zcapy.core.crypto.utils import Base64Encoder
from zcapy.core.api.request import HttpResponse
from zcapy.core.session import Session, Credentials


@pytest.fixture
def key_bytes():
    """Generates a 32-byte AES key for testing."""
    return get_random_bytes(32)


@pytest.fixture
def secret_key(key_bytes):
    """Base64 form of the test key, as stored in a session."""
    return Base64Encoder.encode(key_bytes)


@pytest.fixture
def session(secret_key):
    """Returns a session with a few services configured."""
    return Session(
        uid='123456789',
        secret_key=secret_key,
        zpw_service_map={
            'chat': ['https://chat.zalo.me'],
            'group': ['https://groupchat.zalo.me', 'https://groupchat2.zalo.me'],
            'friend': 'https://friend.zalo.me',
        },
        api_type=30,
        api_version=645,
    )


@pytest.fixture
def credentials():
    """Returns test credentials."""
    return Credentials(
        imei='test-imei-12345',
        user_agent='Mozilla/5.0 (Test)',
        cookies='zpsid=abc; zpw_sek=def',
    )


@pytest.fixture
def cipher():
    """Default param cipher."""
    return ParamCipher()


@pytest.fixture
def make_response(cipher, secret_key):
    """Builds HTTP responses the way the server sends them."""

    def _make(data=None, error_code=0, error_message=None, status=200,
              encrypt=True, key=None):
        envelope = {'error_code': error_code}
        if error_message is not None:
            envelope['error_message'] = error_message
        if data is not None:
            if encrypt:
                envelope['data'] = cipher.encrypt(key or secret_key, data).unwrap()
            else:
                envelope['data'] = data
        return HttpResponse(status=status, body=json.dumps(envelope).encode())

    return _make
