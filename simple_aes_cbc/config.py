"""
Configuration for AES-CBC contexts.

The algorithm name and the key/IV sizes live here as module constants so
call sites never repeat the literals.
"""

from dataclasses import dataclass
from enum import Enum

ALGORITHM = "AES-CBC"
KEY_LENGTH = 16
IV_LENGTH = 16
TEXT_ENCODING = "utf-8"


class IvPolicy(Enum):
    """
    What to do when a context is built without an IV.

    KEY_AS_IV reuses the key bytes as the IV. This keeps ciphertext
    compatible with existing peers but means every message under one key
    shares an IV, so identical plaintexts produce identical ciphertexts.
    REQUIRE_EXPLICIT refuses to build such a context.
    """

    KEY_AS_IV = "key_as_iv"
    REQUIRE_EXPLICIT = "require_explicit"


@dataclass(frozen=True)
class AesCbcConfig:
    """Configuration for a SimpleAesCbc context."""
    algorithm: str = ALGORITHM
    iv_policy: IvPolicy = IvPolicy.KEY_AS_IV
    urlsafe_base64: bool = False

    @classmethod
    def default(cls) -> 'AesCbcConfig':
        """Get default configuration."""
        return cls()
