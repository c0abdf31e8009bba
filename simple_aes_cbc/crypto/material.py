"""
Key and IV material: coercion to bytes and length validation.

Keys and IVs may be given as raw bytes (``bytes``, ``bytearray``,
``memoryview``) or as text, which is UTF-8 encoded. Both are resolved once,
at construction, into an immutable ``SecretMaterial``.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ..config import IV_LENGTH, KEY_LENGTH, TEXT_ENCODING, IvPolicy
from .errors import InvalidKeyLength, InvalidKeyType, IVRequired

logger = logging.getLogger(__name__)

KeyInput = Union[bytes, bytearray, memoryview, str]


def coerce_to_bytes(value: KeyInput, field_name: str = "key") -> bytes:
    """
    Normalize a key or IV into an immutable byte string.

    Mutable buffers are copied, so later changes by the caller cannot
    alter stored key material. Text is UTF-8 encoded; its byte length may
    differ from its character count.

    Args:
        value: Raw bytes or text
        field_name: Name reported in errors ("key" or "iv")

    Returns:
        The canonical bytes

    Raises:
        InvalidKeyType: If value is neither bytes-like nor text
    """
    if isinstance(value, str):
        return value.encode(TEXT_ENCODING)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise InvalidKeyType(field_name, value)


@dataclass(frozen=True)
class SecretMaterial:
    """
    Exactly ``length`` bytes of key or IV material.

    Attributes:
        role: Which role this material plays ("key" or "iv")
        value: The raw bytes (excluded from repr)
    """

    role: str
    value: bytes = field(repr=False)

    def __len__(self) -> int:
        return len(self.value)

    @classmethod
    def from_input(cls, value: KeyInput, field_name: str, length: int) -> 'SecretMaterial':
        """Coerce and validate in one step."""
        raw = coerce_to_bytes(value, field_name)
        if len(raw) != length:
            raise InvalidKeyLength(field_name, len(raw), length)
        return cls(role=field_name, value=raw)


def resolve_key_and_iv(
    key: KeyInput,
    iv: Optional[KeyInput] = None,
    policy: IvPolicy = IvPolicy.KEY_AS_IV,
) -> Tuple[SecretMaterial, SecretMaterial]:
    """
    Build validated key and IV material.

    When ``iv`` is omitted, ``policy`` decides: KEY_AS_IV reuses the key
    bytes, REQUIRE_EXPLICIT raises ``IVRequired``.

    Raises:
        InvalidKeyType: Key or IV of an unsupported type
        InvalidKeyLength: Key or IV not exactly 16 bytes
        IVRequired: IV omitted under REQUIRE_EXPLICIT
    """
    key_material = SecretMaterial.from_input(key, "key", KEY_LENGTH)

    if iv is not None:
        return key_material, SecretMaterial.from_input(iv, "iv", IV_LENGTH)

    if policy is IvPolicy.REQUIRE_EXPLICIT:
        raise IVRequired()

    logger.debug("No IV supplied, reusing key bytes as IV")
    return key_material, SecretMaterial(role="iv", value=key_material.value)
