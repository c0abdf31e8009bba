"""
AES-CBC encryption context.

``SimpleAesCbc`` binds a 16-byte key and IV to a cipher provider and offers
byte-level and text-level encrypt/decrypt. Construction validates the key
material synchronously; every cryptographic call is a coroutine.

Example Usage:
    >>> from simple_aes_cbc import SimpleAesCbc, CryptographyProvider
    >>> aes = SimpleAesCbc("1234567890123456", CryptographyProvider())
    >>> token = await aes.encrypt_string_to_base64("hello my friend")
    >>> await aes.decrypt_string_from_base64(token)
    'hello my friend'

Two contexts built from the same key and IV bytes are interchangeable:
ciphertext produced by one decrypts with the other.
"""

import asyncio
import logging
from typing import Optional

from ..config import AesCbcConfig
from . import codec
from .errors import CryptoError, DecryptionFailed, EncryptionFailed, KeyImportFailed
from .material import KeyInput, resolve_key_and_iv
from .provider import AlgorithmParams, CipherProvider, KeyHandle

logger = logging.getLogger(__name__)

KEY_USAGES = ("encrypt", "decrypt")


class SimpleAesCbc:
    """
    AES-CBC context for one shared secret.

    Attributes:
        algorithm: Algorithm name passed to the provider
        config: Active configuration

    Args:
        key: 16-byte key, as bytes or text (UTF-8 encoded)
        provider: Cipher provider performing the block cipher
        iv: Optional 16-byte IV; when omitted the IV policy in ``config``
            applies (by default the key bytes are reused as IV)
        config: Optional configuration

    Raises:
        InvalidKeyType: Key or IV is neither bytes nor text
        InvalidKeyLength: Key or IV is not exactly 16 bytes
        IVRequired: IV omitted under ``IvPolicy.REQUIRE_EXPLICIT``
    """

    def __init__(
        self,
        key: KeyInput,
        provider: CipherProvider,
        iv: Optional[KeyInput] = None,
        *,
        config: Optional[AesCbcConfig] = None,
    ):
        self._config = config or AesCbcConfig.default()
        self._key, self._iv = resolve_key_and_iv(key, iv, self._config.iv_policy)
        self._provider = provider
        self._key_handle: Optional[KeyHandle] = None
        self._key_lock = asyncio.Lock()

        logger.info(
            f"AES-CBC context created (explicit IV: {iv is not None}, "
            f"policy: {self._config.iv_policy.value})"
        )

    @property
    def algorithm(self) -> str:
        return self._config.algorithm

    @property
    def config(self) -> AesCbcConfig:
        return self._config

    @property
    def has_key_handle(self) -> bool:
        """True once the key has been imported."""
        return self._key_handle is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(algorithm={self.algorithm!r}, key_imported={self.has_key_handle})"

    async def get_key_handle(self) -> KeyHandle:
        """
        Return the provider key handle, importing the key on first use.

        Concurrent first calls are serialized so the key is imported once.
        A failed import is not cached; the next call tries again.

        Raises:
            KeyImportFailed: If the provider rejects the key
        """
        if self._key_handle is not None:
            return self._key_handle

        async with self._key_lock:
            if self._key_handle is not None:
                logger.debug("Key imported by a concurrent call, reusing handle")
                return self._key_handle

            try:
                handle = await self._provider.import_key(
                    "raw",
                    self._key.value,
                    AlgorithmParams(self.algorithm),
                    False,
                    KEY_USAGES,
                )
            except CryptoError:
                raise
            except Exception as e:
                logger.error(f"Key import failed: {e}")
                raise KeyImportFailed(
                    f"provider rejected {self.algorithm} key: {e}",
                    details={"algorithm": self.algorithm},
                ) from e

            self._key_handle = handle
            logger.debug(f"Key imported for {self.algorithm}")
            return handle

    async def encrypt(self, data: bytes) -> bytes:
        """
        Encrypt raw bytes.

        Raises:
            KeyImportFailed: If the key cannot be imported
            EncryptionFailed: If the provider fails to encrypt
        """
        key = await self.get_key_handle()
        try:
            return await self._provider.encrypt(self._params(), key, data)
        except CryptoError:
            raise
        except Exception as e:
            logger.error(f"Encryption failed: {e}")
            raise EncryptionFailed(f"encryption operation failed: {e}") from e

    async def decrypt(self, data: bytes) -> bytes:
        """
        Decrypt raw bytes.

        Ciphertext shape is not checked here; the provider detects
        misaligned input and bad padding.

        Raises:
            KeyImportFailed: If the key cannot be imported
            DecryptionFailed: If the ciphertext is invalid for this key and IV
        """
        key = await self.get_key_handle()
        try:
            return await self._provider.decrypt(self._params(), key, data)
        except CryptoError:
            raise
        except Exception as e:
            logger.error(f"Decryption failed: {e}")
            raise DecryptionFailed(
                f"decryption operation failed: {e}",
                details={"ciphertext_length": len(data)},
            ) from e

    async def encrypt_string(self, data: str) -> str:
        """
        Encrypt text into a byte string (one character per ciphertext byte).

        The result is not necessarily printable or URL-safe; use
        ``encrypt_string_to_base64`` for transport.

        Raises:
            EncryptionFailed: If the text cannot be UTF-8 encoded (lone
                surrogates) or the provider fails
        """
        encrypted = await self.encrypt(codec.text_to_bytes(data))
        return codec.bytes_to_byte_string(encrypted)

    async def decrypt_string(self, data: str) -> str:
        """
        Decrypt a byte string produced by ``encrypt_string``.

        Raises:
            DecryptionFailed: On corrupted input, a wrong key, or
                plaintext that is not valid UTF-8. A wrong IV only garbles
                the first block; it is caught on single-block payloads and
                otherwise only when the garbled block is not valid UTF-8.
        """
        decrypted = await self.decrypt(codec.byte_string_to_bytes(data))
        return codec.bytes_to_text(decrypted)

    async def encrypt_string_to_base64(self, data: str) -> str:
        """Encrypt text into base64."""
        encrypted = await self.encrypt_string(data)
        return codec.byte_string_to_base64(encrypted, urlsafe=self._config.urlsafe_base64)

    async def decrypt_string_from_base64(self, data: str) -> str:
        """Decrypt base64 produced by ``encrypt_string_to_base64``."""
        byte_string = codec.base64_to_byte_string(data, urlsafe=self._config.urlsafe_base64)
        return await self.decrypt_string(byte_string)

    def _params(self) -> AlgorithmParams:
        return AlgorithmParams(self.algorithm, self._iv.value)
