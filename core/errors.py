"""Exception hierarchy for the exchange client.

Every failure is raised to the caller as-is; nothing in this package
retries a signed action, since a replayed nonce is rejected anyway and a
re-signed one is a different action.
"""

from __future__ import annotations

from typing import Any, Optional


class ExchangeClientError(Exception):
    """Base class for all client-side failures."""


class AssetNotFound(ExchangeClientError, KeyError):
    """Raised when a symbol is not part of the exchange universe."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(symbol)

    def __str__(self) -> str:
        return f"asset not found: {self.symbol!r}"


class SigningFailure(ExchangeClientError):
    """Key parsing or signature construction failed."""


class EncodingFailure(ExchangeClientError):
    """An action, number or response could not be encoded or decoded."""


class KeyGenerationFailure(ExchangeClientError):
    """The ephemeral agent key could not be generated or parsed."""


class TransportFailure(ExchangeClientError):
    """The HTTP round-trip failed (network error or non-2xx status)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
