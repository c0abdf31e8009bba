"""
Cipher provider capability.

The facade never touches block-cipher math. It talks to a ``CipherProvider``
exposing three asynchronous operations, shaped after the WebCrypto
``SubtleCrypto`` interface:

    import_key("raw", key_bytes, AlgorithmParams("AES-CBC"), False, ("encrypt", "decrypt"))
    encrypt(AlgorithmParams("AES-CBC", iv), handle, plaintext)
    decrypt(AlgorithmParams("AES-CBC", iv), handle, ciphertext)

``CryptographyProvider`` implements this over the ``cryptography`` package
with PKCS#7 padding. Tests substitute their own providers.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..config import ALGORITHM

logger = logging.getLogger(__name__)

_BLOCK_SIZE_BITS = 128
_AES_KEY_SIZES = (16, 24, 32)


@dataclass(frozen=True)
class AlgorithmParams:
    """Algorithm descriptor passed to provider calls."""
    name: str
    iv: Optional[bytes] = field(default=None, repr=False)


@dataclass(frozen=True, eq=False)
class KeyHandle:
    """
    Opaque, provider-issued reference to imported key material.

    Handles compare by identity. The raw key is kept private and never
    appears in repr; there is no export operation.
    """

    algorithm: str
    usages: Tuple[str, ...]
    extractable: bool
    _material: bytes = field(repr=False)


class CipherProvider(ABC):
    """Asynchronous key-import / encrypt / decrypt capability."""

    @abstractmethod
    async def import_key(
        self,
        fmt: str,
        key_data: bytes,
        algorithm: AlgorithmParams,
        extractable: bool,
        usages: Sequence[str],
    ) -> KeyHandle:
        """Import raw key bytes into a handle bound to ``algorithm``."""

    @abstractmethod
    async def encrypt(self, params: AlgorithmParams, key: KeyHandle, data: bytes) -> bytes:
        """Encrypt ``data`` and return the ciphertext."""

    @abstractmethod
    async def decrypt(self, params: AlgorithmParams, key: KeyHandle, data: bytes) -> bytes:
        """Decrypt ``data`` and return the plaintext."""


class CryptographyProvider(CipherProvider):
    """
    AES-CBC provider backed by the ``cryptography`` library.

    Errors are raised as ``ValueError`` (bad key, bad IV, bad padding,
    misaligned ciphertext) or ``TypeError`` (wrong usage or algorithm on a
    handle). Callers translate these into their own error types.

    Args:
        offload_to_thread: Run the cipher in a worker thread instead of
            on the event loop
    """

    supported_algorithms = (ALGORITHM,)

    def __init__(self, offload_to_thread: bool = False):
        self._offload_to_thread = offload_to_thread
        self._backend = default_backend()

    async def import_key(
        self,
        fmt: str,
        key_data: bytes,
        algorithm: AlgorithmParams,
        extractable: bool,
        usages: Sequence[str],
    ) -> KeyHandle:
        if fmt != "raw":
            raise ValueError(f"Unsupported key format: {fmt}")
        if algorithm.name not in self.supported_algorithms:
            raise ValueError(f"Unsupported algorithm: {algorithm.name}")
        unknown = set(usages) - {"encrypt", "decrypt"}
        if unknown or not usages:
            raise ValueError(f"Invalid key usages: {sorted(usages)}")
        if len(key_data) not in _AES_KEY_SIZES:
            raise ValueError(f"AES key must be 16, 24 or 32 bytes, got {len(key_data)}")

        logger.debug(f"Imported {len(key_data) * 8}-bit {algorithm.name} key")
        return KeyHandle(
            algorithm=algorithm.name,
            usages=tuple(usages),
            extractable=extractable,
            _material=bytes(key_data),
        )

    async def encrypt(self, params: AlgorithmParams, key: KeyHandle, data: bytes) -> bytes:
        self._check_access(params, key, "encrypt")
        return await self._run(self._encrypt_sync, key._material, params.iv, bytes(data))

    async def decrypt(self, params: AlgorithmParams, key: KeyHandle, data: bytes) -> bytes:
        self._check_access(params, key, "decrypt")
        return await self._run(self._decrypt_sync, key._material, params.iv, bytes(data))

    async def _run(self, func, *args) -> bytes:
        if self._offload_to_thread:
            return await asyncio.to_thread(func, *args)
        return func(*args)

    @staticmethod
    def _check_access(params: AlgorithmParams, key: KeyHandle, usage: str) -> None:
        if params.name != key.algorithm:
            raise TypeError(f"Key is bound to {key.algorithm}, not {params.name}")
        if usage not in key.usages:
            raise TypeError(f"Key does not permit {usage}")
        if params.iv is None or len(params.iv) != _BLOCK_SIZE_BITS // 8:
            raise ValueError("AES-CBC requires a 16-byte IV")

    def _cipher(self, key: bytes, iv: bytes) -> Cipher:
        return Cipher(algorithms.AES(key), modes.CBC(iv), backend=self._backend)

    def _encrypt_sync(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        padder = padding.PKCS7(_BLOCK_SIZE_BITS).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = self._cipher(key, iv).encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    def _decrypt_sync(self, key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        decryptor = self._cipher(key, iv).decryptor()
        # Raises ValueError when the input is not a whole number of blocks
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(_BLOCK_SIZE_BITS).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
