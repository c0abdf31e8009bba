"""
Unit Tests for the ciphertext text codec
"""

import pytest

from simple_aes_cbc.crypto import DecryptionFailed, EncryptionFailed, codec


class TestByteString:
    """Byte <-> one-character-per-byte string mapping."""

    def test_every_byte_value(self):
        data = bytes(range(256))

        text = codec.bytes_to_byte_string(data)

        assert len(text) == 256
        assert [ord(c) for c in text] == list(range(256))
        assert codec.byte_string_to_bytes(text) == data

    def test_rejects_wide_characters(self):
        with pytest.raises(DecryptionFailed) as exc_info:
            codec.byte_string_to_bytes("abĀ")

        assert exc_info.value.details["position"] == 2


class TestBase64:
    """Byte string <-> base64."""

    def test_standard_alphabet(self):
        text = codec.bytes_to_byte_string(b"\xfb\xff\xfe")

        assert codec.byte_string_to_base64(text) == "+//+"
        assert codec.base64_to_byte_string("+//+") == text

    def test_urlsafe_alphabet(self):
        text = codec.bytes_to_byte_string(b"\xfb\xff\xfe")

        assert codec.byte_string_to_base64(text, urlsafe=True) == "-__-"
        assert codec.base64_to_byte_string("-__-", urlsafe=True) == text

    @pytest.mark.parametrize("urlsafe", [False, True])
    @pytest.mark.parametrize("value", ["abc", "####", "é123", "!!-__-$$", "-__- "])
    def test_malformed(self, value, urlsafe):
        with pytest.raises(DecryptionFailed):
            codec.base64_to_byte_string(value, urlsafe=urlsafe)


class TestUtf8:
    """Plaintext text <-> bytes."""

    def test_roundtrip(self):
        assert codec.bytes_to_text(codec.text_to_bytes("héllo ✓")) == "héllo ✓"

    def test_invalid_utf8(self):
        with pytest.raises(DecryptionFailed):
            codec.bytes_to_text(b"ok\xff\xfe")

    def test_lone_surrogate(self):
        with pytest.raises(EncryptionFailed) as exc_info:
            codec.text_to_bytes("ok\ud800")

        assert exc_info.value.details["position"] == 2
