"""
Unit Tests for key/IV coercion and validation
"""

import pytest

from simple_aes_cbc.config import IvPolicy
from simple_aes_cbc.crypto import (
    InvalidKeyLength,
    InvalidKeyType,
    IVRequired,
    SecretMaterial,
    coerce_to_bytes,
    resolve_key_and_iv,
)


class TestCoerceToBytes:
    """Test cases for coerce_to_bytes."""

    def test_text_is_utf8_encoded(self):
        assert coerce_to_bytes("abc") == b"abc"
        assert coerce_to_bytes("é") == b"\xc3\xa9"

    def test_bytes_pass_through(self):
        data = b"\x00\xff" * 8
        assert coerce_to_bytes(data) == data

    def test_mutable_buffers_are_copied(self):
        buffer = bytearray(b"0123456789abcdef")

        result = coerce_to_bytes(buffer)
        buffer[0] = 0

        assert isinstance(result, bytes)
        assert result == b"0123456789abcdef"

    def test_memoryview(self):
        assert coerce_to_bytes(memoryview(b"abcd")) == b"abcd"

    def test_invalid_type_names_field(self):
        with pytest.raises(InvalidKeyType) as exc_info:
            coerce_to_bytes(12, "iv")

        assert exc_info.value.details["field"] == "iv"


class TestSecretMaterial:
    """Test cases for SecretMaterial."""

    def test_from_input(self):
        material = SecretMaterial.from_input("a" * 16, "key", 16)

        assert material.value == b"a" * 16
        assert len(material) == 16
        assert material.role == "key"

    def test_repr_hides_value(self):
        material = SecretMaterial.from_input("topsecretkey1234", "key", 16)

        assert "topsecret" not in repr(material)

    def test_length_mismatch(self):
        with pytest.raises(InvalidKeyLength) as exc_info:
            SecretMaterial.from_input("short", "key", 16)

        assert exc_info.value.details == {"field": "key", "length": 5, "expected": 16}


class TestResolveKeyAndIv:
    """Test cases for resolve_key_and_iv."""

    def test_iv_defaults_to_key(self):
        key, iv = resolve_key_and_iv("1234567890123456")

        assert iv.value == key.value
        assert iv.role == "iv"

    def test_explicit_iv(self):
        key, iv = resolve_key_and_iv(b"k" * 16, "v" * 16)

        assert key.value == b"k" * 16
        assert iv.value == b"v" * 16

    def test_key_checked_before_iv(self):
        with pytest.raises(InvalidKeyLength) as exc_info:
            resolve_key_and_iv("k" * 3, "v" * 3)

        assert exc_info.value.details["field"] == "key"

    def test_require_explicit(self):
        with pytest.raises(IVRequired):
            resolve_key_and_iv("k" * 16, policy=IvPolicy.REQUIRE_EXPLICIT)
