"""
Exception hierarchy for the AES-CBC wrapper.

Construction-time errors (``InvalidKeyType``, ``InvalidKeyLength``,
``IVRequired``) are raised synchronously before any cipher work happens.
The remaining errors are raised from the asynchronous operations and wrap
whatever the cipher provider reported.

Error messages and details never include key or IV bytes.
"""

from typing import Any, Dict, Optional


class CryptoError(Exception):
    """
    Base exception for cryptographic errors.

    Attributes:
        message: Human readable description
        code: Numeric error code (see subclasses)
        details: Extra, non-secret context about the failure
    """

    def __init__(self, message: str, code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        base = f"{type(self).__name__}: {self.message}"
        if self.code:
            base += f" (Code: {self.code})"
        return base


class InvalidKeyType(CryptoError):
    """Key or IV was neither bytes nor text."""

    def __init__(self, field: str, value: Any):
        super().__init__(
            f"{field} must be bytes or str, got {type(value).__name__}",
            code=1001,
            details={"field": field, "type": type(value).__name__},
        )


class InvalidKeyLength(CryptoError):
    """Coerced key or IV was not exactly the required length."""

    def __init__(self, field: str, length: int, expected: int):
        super().__init__(
            f"{field} must be exactly {expected} bytes, got {length}",
            code=1002,
            details={"field": field, "length": length, "expected": expected},
        )


class IVRequired(CryptoError):
    """No IV was supplied while the IV policy demands an explicit one."""

    def __init__(self):
        super().__init__("an explicit IV is required by the configured IV policy", code=1003)


class KeyImportFailed(CryptoError):
    """The cipher provider rejected the raw key material."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=2001, details=details)


class EncryptionFailed(CryptoError):
    """The cipher provider failed to encrypt."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=3002, details=details)


class DecryptionFailed(CryptoError):
    """
    Ciphertext is not valid for this key and IV.

    Covers a wrong key, a wrong IV, truncated or corrupted input and bad
    padding. The provider does not distinguish between these cases.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=4001, details=details)
