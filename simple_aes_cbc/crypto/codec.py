"""
Text codec for ciphertext transport.

Two textual forms of a ciphertext are supported:

    byte string: one character per byte, code point == byte value
                 (U+0000..U+00FF). Compact but not printable-safe.
    base64:      the byte string's bytes in base64, standard or URL-safe
                 alphabet.

Decoding helpers raise ``DecryptionFailed`` on malformed input, since a
ciphertext that cannot even be decoded is corrupted.
"""

import base64
import binascii

from ..config import TEXT_ENCODING
from .errors import DecryptionFailed, EncryptionFailed

# latin-1 maps code points 0..255 to the identical byte value
_BYTE_STRING_ENCODING = "latin-1"


def text_to_bytes(text: str) -> bytes:
    """Encode plaintext as UTF-8; lone surrogates are rejected."""
    try:
        return text.encode(TEXT_ENCODING)
    except UnicodeEncodeError as e:
        raise EncryptionFailed(
            "text cannot be encoded as UTF-8",
            details={"position": e.start},
        ) from e


def bytes_to_text(data: bytes) -> str:
    """Decode plaintext bytes as strict UTF-8."""
    try:
        return data.decode(TEXT_ENCODING)
    except UnicodeDecodeError as e:
        raise DecryptionFailed(
            "decrypted data is not valid UTF-8",
            details={"position": e.start},
        ) from e


def bytes_to_byte_string(data: bytes) -> str:
    return data.decode(_BYTE_STRING_ENCODING)


def byte_string_to_bytes(text: str) -> bytes:
    """Inverse of ``bytes_to_byte_string``."""
    try:
        return text.encode(_BYTE_STRING_ENCODING)
    except UnicodeEncodeError as e:
        raise DecryptionFailed(
            "ciphertext contains a character outside the byte range",
            details={"position": e.start},
        ) from e


def byte_string_to_base64(text: str, urlsafe: bool = False) -> str:
    raw = byte_string_to_bytes(text)
    encoded = base64.urlsafe_b64encode(raw) if urlsafe else base64.b64encode(raw)
    return encoded.decode("ascii")


def base64_to_byte_string(text: str, urlsafe: bool = False) -> str:
    try:
        altchars = b"-_" if urlsafe else None
        raw = base64.b64decode(text, altchars=altchars, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecryptionFailed("ciphertext is not valid base64") from e
    return bytes_to_byte_string(raw)
