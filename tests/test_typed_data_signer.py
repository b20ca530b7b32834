"""Tests for web3_infra/typed_data_signer.py."""

from __future__ import annotations

import pytest
from eth_account import Account
from eth_utils import keccak

from core.errors import SigningFailure
from models.actions import Signature
from web3_infra.signing_domain import Network
from web3_infra.typed_data_signer import (
    TypedDataSigner,
    recover_signer,
)

PRIVATE_KEY = "0x" + "11" * 32
CONNECTION_ID = keccak(b"connection")
DEST = "0x1234567890123456789012345678901234567890"


class TestTypedDataSigner:

    @pytest.fixture
    def signer(self) -> TypedDataSigner:
        return TypedDataSigner(PRIVATE_KEY)

    def test_address_matches_key(self, signer: TypedDataSigner) -> None:
        assert signer.address == Account.from_key(PRIVATE_KEY).address

    def test_key_without_prefix(self) -> None:
        assert TypedDataSigner("11" * 32).address == TypedDataSigner(PRIVATE_KEY).address

    def test_invalid_key_raises(self) -> None:
        with pytest.raises(SigningFailure, match="invalid private key"):
            TypedDataSigner("not-a-key")

    def test_signature_shape(self, signer: TypedDataSigner) -> None:
        sig = signer.sign_l1_action(CONNECTION_ID, Network.MAINNET)
        assert isinstance(sig, Signature)
        assert sig.r.startswith("0x")
        assert sig.s.startswith("0x")
        assert sig.v in (27, 28)

    @pytest.mark.parametrize("network", list(Network))
    def test_l1_signature_recovers_to_wallet(
        self, signer: TypedDataSigner, network: Network
    ) -> None:
        sig = signer.sign_l1_action(CONNECTION_ID, network)
        typed = TypedDataSigner.l1_typed_data(CONNECTION_ID, network)
        assert recover_signer(typed, sig) == signer.address

    def test_l1_typed_data_fields(self) -> None:
        typed = TypedDataSigner.l1_typed_data(CONNECTION_ID, Network.MAINNET)
        assert typed["primaryType"] == "Agent"
        assert typed["domain"]["chainId"] == 42161
        assert typed["message"] == {"source": "a", "connectionId": CONNECTION_ID}

        typed = TypedDataSigner.l1_typed_data(CONNECTION_ID, Network.LOCAL)
        assert typed["domain"]["chainId"] == 1337
        assert typed["message"]["source"] == "b"

    def test_deterministic(self, signer: TypedDataSigner) -> None:
        a = signer.sign_l1_action(CONNECTION_ID, Network.TESTNET)
        b = signer.sign_l1_action(CONNECTION_ID, Network.TESTNET)
        assert a == b

    def test_network_changes_signature(self, signer: TypedDataSigner) -> None:
        a = signer.sign_l1_action(CONNECTION_ID, Network.MAINNET)
        b = signer.sign_l1_action(CONNECTION_ID, Network.TESTNET)
        assert a != b

    def test_connection_id_changes_signature(self, signer: TypedDataSigner) -> None:
        a = signer.sign_l1_action(CONNECTION_ID, Network.MAINNET)
        b = signer.sign_l1_action(keccak(b"other"), Network.MAINNET)
        assert a != b

    def test_usd_transfer(self, signer: TypedDataSigner) -> None:
        sig = signer.sign_usd_transfer(DEST, "10.5", 1_700_000_000_000, Network.MAINNET)
        typed = TypedDataSigner.usd_transfer_typed_data(
            DEST, "10.5", 1_700_000_000_000, Network.MAINNET
        )
        assert typed["primaryType"] == "HyperliquidTransaction:UsdTransfer"
        assert typed["domain"]["chainId"] == 42161
        assert typed["message"] == {
            "destination": DEST,
            "amount": "10.5",
            "time": 1_700_000_000_000,
        }
        assert recover_signer(typed, sig) == signer.address

    def test_usd_transfer_testnet_chain(self) -> None:
        typed = TypedDataSigner.usd_transfer_typed_data(DEST, "1", 1, Network.TESTNET)
        assert typed["domain"]["chainId"] == 421613

    def test_agent_connection(self, signer: TypedDataSigner) -> None:
        sig = signer.sign_agent_connection(CONNECTION_ID, Network.MAINNET)
        typed = TypedDataSigner.agent_typed_data(CONNECTION_ID, Network.MAINNET)
        assert typed["message"]["source"] == "https://hyperliquid.xyz"
        assert recover_signer(typed, sig) == signer.address

    def test_agent_and_l1_signatures_differ(self, signer: TypedDataSigner) -> None:
        l1 = signer.sign_l1_action(CONNECTION_ID, Network.MAINNET)
        agent = signer.sign_agent_connection(CONNECTION_ID, Network.MAINNET)
        assert l1 != agent

    def test_repr_hides_key(self, signer: TypedDataSigner) -> None:
        assert "11" * 32 not in repr(signer)


# Signatures computed outside this codebase (EIP-712 digest, secp256k1 with
# RFC 6979 nonces, low-s) for the key 0x11..11.
ORDER_CONNECTION_ID = bytes.fromhex(
    "e4d8cf1060998722fe42b5dc742b7dba374fb5a42b9b1adb83477bc2acc2c114"
)
AGENT_CONNECTION_ID = bytes.fromhex(
    "227c5a8f6845f0e370c353eecd125a64ade42d8b64bcd2beebd6923cfcf894e7"
)


def _vrs(sig: Signature) -> tuple[int, int, int]:
    return sig.v, int(sig.r, 16), int(sig.s, 16)


class TestKnownSignatures:

    @pytest.fixture
    def signer(self) -> TypedDataSigner:
        return TypedDataSigner(PRIVATE_KEY)

    def test_wallet_address(self, signer: TypedDataSigner) -> None:
        assert signer.address.lower() == "0x19e7e376e7c213b7e7e7e46cc70a5dd086daff2a"

    def test_l1_mainnet(self, signer: TypedDataSigner) -> None:
        sig = signer.sign_l1_action(ORDER_CONNECTION_ID, Network.MAINNET)
        assert _vrs(sig) == (
            27,
            0x1C195309AA2936BB760B9760223D518B43F9199DD6C1FF15E18AE8E6BA89CAA1,
            0x4D48457C4F867C4A6F0C59BB26AAD5A26ABB2D62DA18348C44D233C156CFAA75,
        )

    def test_l1_testnet(self, signer: TypedDataSigner) -> None:
        sig = signer.sign_l1_action(ORDER_CONNECTION_ID, Network.TESTNET)
        assert _vrs(sig) == (
            27,
            0xC148EAE440FB79036C1F485ACF6E431888EC7405C52C9F75BF4A7654D2E1CA1B,
            0x2A7ACCEA2C791AB2EB4BCC26F5ACC7A8F475CAFA897025ABD2E5843FDB1CE8A1,
        )

    def test_usd_transfer_mainnet(self, signer: TypedDataSigner) -> None:
        sig = signer.sign_usd_transfer(DEST, "12.5", 1_700_000_000_000, Network.MAINNET)
        assert _vrs(sig) == (
            28,
            0x206D835550958315DA4B82D5F5A2FA37B1F6AB15A5C5C4CE5D31A2F4F56F6894,
            0x9437FEE13D6CB9A9ADD19E720753146E99D015C9F1D45BBCFFD461F67C63AEC,
        )

    def test_agent_approval_mainnet(self, signer: TypedDataSigner) -> None:
        sig = signer.sign_agent_connection(AGENT_CONNECTION_ID, Network.MAINNET)
        assert _vrs(sig) == (
            28,
            0x41237559511A646BC681DA6B86167EFF082E095D9B3F3A0771126F898D0A518D,
            0x70AD523C440986E1BBD022C8E880732CAC892030ACB88EA55049713B55841B43,
        )
