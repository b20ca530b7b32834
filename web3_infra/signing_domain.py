"""Network configuration and EIP-712 domain selection.

The domain a signature is scoped to depends on two things only: which
network the client targets and which family the action belongs to.
``select_domain`` is the single place that maps one to the other.

    network   L1 chain   transfer/agent chain   source   chain label
    mainnet   42161      42161                  "a"      Arbitrum
    testnet   421613     421613                 "b"      ArbitrumGoerli
    local     1337       1337                   "b"      ArbitrumGoerli
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from config.constants import (
    DOMAIN_NAME,
    DOMAIN_VERSION,
    LOCAL_API_URL,
    LOCAL_CHAIN_ID,
    MAINNET_API_URL,
    MAINNET_CHAIN_ID,
    MAINNET_CHAIN_LABEL,
    MAINNET_SOURCE,
    TESTNET_CHAIN_ID,
    TESTNET_CHAIN_LABEL,
    TESTNET_SOURCE,
    ZERO_ADDRESS,
)


class Network(str, Enum):
    """Target network, fixed at client construction."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    LOCAL = "local"

    @classmethod
    def from_base_url(cls, base_url: str) -> Network:
        """Infer the network from an API base URL.

        Only the exact mainnet URL selects mainnet; anything that is not
        the local URL is treated as testnet.
        """
        url = base_url.rstrip("/")
        if url == MAINNET_API_URL:
            return cls.MAINNET
        if url == LOCAL_API_URL:
            return cls.LOCAL
        return cls.TESTNET

    @property
    def is_mainnet(self) -> bool:
        return self is Network.MAINNET


class ActionFamily(str, Enum):
    """How an action is signed."""

    L1 = "l1"  # Agent{source, connectionId} over an encoded tuple hash
    USD_TRANSFER = "usd_transfer"
    CONNECT_AGENT = "connect_agent"


_NETWORK_CHAIN_IDS: dict[Network, int] = {
    Network.MAINNET: MAINNET_CHAIN_ID,
    Network.TESTNET: TESTNET_CHAIN_ID,
    Network.LOCAL: LOCAL_CHAIN_ID,
}

_CHAIN_IDS: dict[tuple[Network, ActionFamily], int] = {
    (network, family): chain_id
    for network, chain_id in _NETWORK_CHAIN_IDS.items()
    for family in ActionFamily
}
# Typed-data actions on a local node are verified against the testnet domain.
_CHAIN_IDS[(Network.LOCAL, ActionFamily.USD_TRANSFER)] = TESTNET_CHAIN_ID
_CHAIN_IDS[(Network.LOCAL, ActionFamily.CONNECT_AGENT)] = TESTNET_CHAIN_ID


@dataclass(frozen=True)
class SigningDomain:
    """EIP-712 domain parameters."""

    name: str
    version: str
    chain_id: int
    verifying_contract: str = ZERO_ADDRESS

    def to_typed_data(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
        }


def select_domain(network: Network, family: ActionFamily) -> SigningDomain:
    """Return the domain used to sign *family* actions on *network*."""
    return SigningDomain(
        name=DOMAIN_NAME,
        version=DOMAIN_VERSION,
        chain_id=_CHAIN_IDS[(network, family)],
    )


def source_tag(network: Network) -> str:
    """Source of the Agent struct for L1 actions."""
    return MAINNET_SOURCE if network.is_mainnet else TESTNET_SOURCE


def chain_label(network: Network) -> str:
    """``chain`` field of usdTransfer / connect actions."""
    return MAINNET_CHAIN_LABEL if network.is_mainnet else TESTNET_CHAIN_LABEL
