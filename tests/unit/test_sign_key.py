"""Tests for request signing."""
import hashlib

from zcapy.core.crypto.hashing import sign_key, md5_hex


class TestSignKey:
    """Test suite for sign_key."""

    def test_md5_hex(self):
        """Test md5 helper output."""
        assert md5_hex('') == 'd41d8cd98f00b204e9800998ecf8427e'

    def test_values_in_sorted_key_order(self):
        """Test values are concatenated by sorted key."""
        params = {'imei': 'device', 'computer_name': 'Web', 'language': 'vi'}
        expected = hashlib.md5(b'zsecuregetlogininfoWebdevicevi').hexdigest()

        assert sign_key('getlogininfo', params) == expected

    def test_insertion_order_does_not_matter(self):
        """Test the digest only depends on keys and values."""
        assert sign_key('t', {'a': 1, 'b': 2}) == sign_key('t', {'b': 2, 'a': 1})

    def test_none_and_bool_rendering(self):
        """Test None contributes nothing and booleans render lowercase."""
        expected = hashlib.md5(b'zsecuretypetrue1').hexdigest()

        assert sign_key('type', {'a': True, 'b': None, 'c': 1}) == expected
