"""
AES-CBC core.

Modules:
    errors: Exception hierarchy
    material: Key/IV coercion and validation
    provider: Cipher provider capability and the cryptography-backed default
    codec: Text and ciphertext transport encodings
    engine: SimpleAesCbc context

Usage:
    >>> from simple_aes_cbc.crypto import SimpleAesCbc, CryptographyProvider
    >>> aes = SimpleAesCbc(b"\\x00" * 16, CryptographyProvider())
    >>> ciphertext = await aes.encrypt(b"Hello, World!")
"""

from .engine import SimpleAesCbc
from .errors import (
    CryptoError,
    DecryptionFailed,
    EncryptionFailed,
    InvalidKeyLength,
    InvalidKeyType,
    IVRequired,
    KeyImportFailed,
)
from .material import SecretMaterial, coerce_to_bytes, resolve_key_and_iv
from .provider import AlgorithmParams, CipherProvider, CryptographyProvider, KeyHandle

__all__ = [
    # Context
    "SimpleAesCbc",
    # Errors
    "CryptoError",
    "InvalidKeyType",
    "InvalidKeyLength",
    "IVRequired",
    "KeyImportFailed",
    "EncryptionFailed",
    "DecryptionFailed",
    # Key material
    "SecretMaterial",
    "coerce_to_bytes",
    "resolve_key_and_iv",
    # Provider
    "AlgorithmParams",
    "CipherProvider",
    "CryptographyProvider",
    "KeyHandle",
]
