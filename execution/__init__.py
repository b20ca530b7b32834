"""hl-exchange — execution package."""

from .exchange_client import ExchangeClient, Transport

__all__ = [
    "ExchangeClient",
    "Transport",
]
