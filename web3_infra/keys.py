"""Ephemeral agent keys.

Key generation is injected into the exchange client as a ``KeySource`` so
tests can substitute a deterministic one.
"""

from __future__ import annotations

import secrets
from typing import Callable, Union

from eth_account import Account

from core.errors import KeyGenerationFailure

KeySource = Callable[[], bytes]

KEY_LENGTH = 32


def secure_random_key() -> bytes:
    """32 bytes from the OS CSPRNG."""
    return secrets.token_bytes(KEY_LENGTH)


def key_to_hex(key: bytes) -> str:
    """Hex form of *key* without ``0x`` prefix."""
    return key.hex()


def derive_address(key: Union[bytes, str]) -> str:
    """Checksummed address controlled by *key*.

    Raises
    ------
    KeyGenerationFailure
        If *key* is not a valid secp256k1 private key.
    """
    try:
        return Account.from_key(key).address
    except Exception as exc:  # noqa: BLE001  eth_keys raises its own ValidationError
        raise KeyGenerationFailure(f"invalid agent key: {exc}") from exc


def generate_agent_key(source: KeySource = secure_random_key) -> tuple[bytes, str]:
    """Draw a key from *source* and derive its address."""
    try:
        key = source()
    except Exception as exc:  # noqa: BLE001
        raise KeyGenerationFailure(f"key source failed: {exc}") from exc
    if not isinstance(key, bytes) or len(key) != KEY_LENGTH:
        raise KeyGenerationFailure(f"key source must return {KEY_LENGTH} bytes")
    return key, derive_address(key)
