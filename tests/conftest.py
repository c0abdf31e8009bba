# simple-aes-cbc test configuration
# Shared fixtures and a recording fake cipher provider

import asyncio
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from simple_aes_cbc.crypto import CryptographyProvider
from simple_aes_cbc.crypto.provider import AlgorithmParams, CipherProvider, KeyHandle

pytest_plugins = ['pytest_asyncio']


class RecordingProvider(CipherProvider):
    """
    Wraps a real provider and records calls.

    ``fail_imports`` makes the next N imports raise, ``import_delay`` holds
    each import open long enough for concurrent callers to pile up.
    """

    def __init__(self, inner=None, fail_imports=0, import_delay=0.0):
        self.inner = inner or CryptographyProvider()
        self.fail_imports = fail_imports
        self.import_delay = import_delay
        self.import_calls = []
        self.encrypt_calls = []
        self.decrypt_calls = []

    async def import_key(self, fmt, key_data, algorithm, extractable, usages) -> KeyHandle:
        self.import_calls.append((fmt, key_data, algorithm, extractable, tuple(usages)))
        if self.import_delay:
            await asyncio.sleep(self.import_delay)
        if self.fail_imports:
            self.fail_imports -= 1
            raise ValueError("provider unavailable")
        return await self.inner.import_key(fmt, key_data, algorithm, extractable, usages)

    async def encrypt(self, params: AlgorithmParams, key: KeyHandle, data: bytes) -> bytes:
        self.encrypt_calls.append((params, key))
        return await self.inner.encrypt(params, key, data)

    async def decrypt(self, params: AlgorithmParams, key: KeyHandle, data: bytes) -> bytes:
        self.decrypt_calls.append((params, key))
        return await self.inner.decrypt(params, key, data)


@pytest.fixture
def provider():
    """Provide the default cryptography-backed provider."""
    return CryptographyProvider()


@pytest.fixture
def recording_provider():
    """Provide a provider that records every call."""
    return RecordingProvider()


@pytest.fixture
def random_key():
    """Provide a random 16-byte binary key."""
    return os.urandom(16)


@pytest.fixture
def make_recording_provider():
    """Provide the RecordingProvider class for tests needing custom options."""
    return RecordingProvider
