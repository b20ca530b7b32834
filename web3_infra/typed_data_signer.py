"""TypedDataSigner — EIP-712 signing for exchange actions.

Three schemes share one primitive (``sign_typed_data``):

* L1 actions sign ``Agent{source, connectionId}`` where ``connectionId``
  is the encoder's tuple hash and ``source`` tags the network.
* USD transfers sign ``HyperliquidTransaction:UsdTransfer`` directly.
* Agent approval signs ``Agent`` with the service URL as ``source`` and
  the hash of the agent address as ``connectionId``.

Signing is pure: the same key, message and domain always give the same
``{r, s, v}`` (RFC 6979 nonces).
"""

from __future__ import annotations

from typing import Any

import structlog
from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from eth_utils import to_hex

from config.constants import AGENT_SOURCE_URL
from core.errors import SigningFailure
from models.actions import Signature
from web3_infra.signing_domain import (
    ActionFamily,
    Network,
    SigningDomain,
    select_domain,
    source_tag,
)

logger = structlog.get_logger("web3_infra.typed_data_signer")

EIP712_DOMAIN_FIELDS: list[dict[str, str]] = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

AGENT_PRIMARY_TYPE = "Agent"
AGENT_FIELDS: list[dict[str, str]] = [
    {"name": "source", "type": "string"},
    {"name": "connectionId", "type": "bytes32"},
]

USD_TRANSFER_PRIMARY_TYPE = "HyperliquidTransaction:UsdTransfer"
USD_TRANSFER_FIELDS: list[dict[str, str]] = [
    {"name": "destination", "type": "string"},
    {"name": "amount", "type": "string"},
    {"name": "time", "type": "uint64"},
]


def build_typed_data(
    domain: SigningDomain,
    primary_type: str,
    fields: list[dict[str, str]],
    message: dict[str, Any],
) -> dict[str, Any]:
    """Full EIP-712 document accepted by ``encode_typed_data``."""
    return {
        "domain": domain.to_typed_data(),
        "types": {
            "EIP712Domain": EIP712_DOMAIN_FIELDS,
            primary_type: fields,
        },
        "primaryType": primary_type,
        "message": message,
    }


def encode(typed_data: dict[str, Any]) -> SignableMessage:
    try:
        return encode_typed_data(full_message=typed_data)
    except Exception as exc:  # noqa: BLE001
        raise SigningFailure(f"cannot encode typed data: {exc}") from exc


def recover_signer(typed_data: dict[str, Any], signature: Signature) -> str:
    """Address that produced *signature* over *typed_data*."""
    vrs = (signature.v, int(signature.r, 16), int(signature.s, 16))
    return Account.recover_message(encode(typed_data), vrs=vrs)


class TypedDataSigner:
    """Wraps a private key and signs typed data for a given network.

    Parameters
    ----------
    private_key:
        Hex-encoded secp256k1 key (``0x`` prefix optional) or raw bytes.
    """

    def __init__(self, private_key: str | bytes) -> None:
        try:
            self._account = Account.from_key(private_key)
        except Exception as exc:  # noqa: BLE001
            raise SigningFailure("invalid private key") from exc

    @property
    def address(self) -> str:
        return self._account.address

    # ── Primitive ────────────────────────────────────────────────

    def sign_typed_data(self, typed_data: dict[str, Any]) -> Signature:
        signable = encode(typed_data)
        try:
            signed = self._account.sign_message(signable)
        except Exception as exc:  # noqa: BLE001
            raise SigningFailure(f"signing failed: {exc}") from exc

        logger.debug(
            "typed_data_signer.signed",
            primary_type=typed_data["primaryType"],
            chain_id=typed_data["domain"]["chainId"],
        )
        return Signature(r=to_hex(signed.r), s=to_hex(signed.s), v=signed.v)

    # ── Schemes ──────────────────────────────────────────────────

    @staticmethod
    def l1_typed_data(connection_id: bytes, network: Network) -> dict[str, Any]:
        return build_typed_data(
            select_domain(network, ActionFamily.L1),
            AGENT_PRIMARY_TYPE,
            AGENT_FIELDS,
            {"source": source_tag(network), "connectionId": connection_id},
        )

    @staticmethod
    def usd_transfer_typed_data(
        destination: str,
        amount: str,
        time: int,
        network: Network,
    ) -> dict[str, Any]:
        return build_typed_data(
            select_domain(network, ActionFamily.USD_TRANSFER),
            USD_TRANSFER_PRIMARY_TYPE,
            USD_TRANSFER_FIELDS,
            {"destination": destination, "amount": amount, "time": time},
        )

    @staticmethod
    def agent_typed_data(
        connection_id: bytes,
        network: Network,
        source: str = AGENT_SOURCE_URL,
    ) -> dict[str, Any]:
        return build_typed_data(
            select_domain(network, ActionFamily.CONNECT_AGENT),
            AGENT_PRIMARY_TYPE,
            AGENT_FIELDS,
            {"source": source, "connectionId": connection_id},
        )

    def sign_l1_action(self, connection_id: bytes, network: Network) -> Signature:
        return self.sign_typed_data(self.l1_typed_data(connection_id, network))

    def sign_usd_transfer(
        self,
        destination: str,
        amount: str,
        time: int,
        network: Network,
    ) -> Signature:
        return self.sign_typed_data(
            self.usd_transfer_typed_data(destination, amount, time, network)
        )

    def sign_agent_connection(
        self,
        connection_id: bytes,
        network: Network,
        source: str = AGENT_SOURCE_URL,
    ) -> Signature:
        """Main-wallet authorization of an agent identified by *connection_id*."""
        return self.sign_typed_data(self.agent_typed_data(connection_id, network, source))

    def __repr__(self) -> str:
        return f"TypedDataSigner(address={self.address})"
