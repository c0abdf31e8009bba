"""
simple-aes-cbc

AES-CBC encryption of short strings and byte payloads under a 16-byte
shared secret, with byte-string and base64 ciphertext encodings.

Subpackages:
    crypto: Key material, cipher provider and the SimpleAesCbc context
    cli: Command line wrapper
"""

from .config import ALGORITHM, AesCbcConfig, IvPolicy
from .crypto import (
    CipherProvider,
    CryptoError,
    CryptographyProvider,
    DecryptionFailed,
    EncryptionFailed,
    InvalidKeyLength,
    InvalidKeyType,
    IVRequired,
    KeyImportFailed,
    SimpleAesCbc,
)

__all__ = [
    'ALGORITHM',
    'AesCbcConfig',
    'IvPolicy',
    'SimpleAesCbc',
    'CipherProvider',
    'CryptographyProvider',
    'CryptoError',
    'InvalidKeyType',
    'InvalidKeyLength',
    'IVRequired',
    'KeyImportFailed',
    'EncryptionFailed',
    'DecryptionFailed',
]

__version__ = "1.0.0"
