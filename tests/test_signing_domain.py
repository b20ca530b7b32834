"""Tests for web3_infra/signing_domain.py."""

from __future__ import annotations

import pytest

from config.constants import (
    LOCAL_API_URL,
    MAINNET_API_URL,
    TESTNET_API_URL,
    ZERO_ADDRESS,
)
from web3_infra.signing_domain import (
    ActionFamily,
    Network,
    chain_label,
    select_domain,
    source_tag,
)


class TestNetworkFromBaseUrl:

    def test_mainnet(self) -> None:
        assert Network.from_base_url(MAINNET_API_URL) is Network.MAINNET

    def test_trailing_slash_ignored(self) -> None:
        assert Network.from_base_url(MAINNET_API_URL + "/") is Network.MAINNET

    def test_testnet(self) -> None:
        assert Network.from_base_url(TESTNET_API_URL) is Network.TESTNET

    def test_local(self) -> None:
        assert Network.from_base_url(LOCAL_API_URL) is Network.LOCAL

    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://api.hyperliquid.xyz", "https://api.hyperliquid.xyz/v2"],
    )
    def test_anything_else_is_not_mainnet(self, url: str) -> None:
        assert Network.from_base_url(url) is not Network.MAINNET


class TestSelectDomain:

    @pytest.mark.parametrize("family", list(ActionFamily))
    def test_mainnet_uses_42161(self, family: ActionFamily) -> None:
        assert select_domain(Network.MAINNET, family).chain_id == 42161

    @pytest.mark.parametrize("network", [Network.TESTNET, Network.LOCAL])
    @pytest.mark.parametrize("family", [ActionFamily.L1, ActionFamily.USD_TRANSFER])
    def test_non_mainnet_uses_distinct_chain(
        self, network: Network, family: ActionFamily
    ) -> None:
        assert select_domain(network, family).chain_id != 42161

    def test_testnet_and_local_chain_ids(self) -> None:
        assert select_domain(Network.TESTNET, ActionFamily.L1).chain_id == 421613
        assert select_domain(Network.LOCAL, ActionFamily.L1).chain_id == 1337

    @pytest.mark.parametrize("family", [ActionFamily.USD_TRANSFER, ActionFamily.CONNECT_AGENT])
    def test_local_typed_data_uses_testnet_chain(self, family: ActionFamily) -> None:
        assert select_domain(Network.LOCAL, family).chain_id == 421613

    def test_shared_shape(self) -> None:
        domain = select_domain(Network.TESTNET, ActionFamily.CONNECT_AGENT)
        assert domain.to_typed_data() == {
            "name": "Exchange",
            "version": "1",
            "chainId": 421613,
            "verifyingContract": ZERO_ADDRESS,
        }

    def test_pure(self) -> None:
        assert select_domain(Network.MAINNET, ActionFamily.L1) == select_domain(
            Network.MAINNET, ActionFamily.L1
        )


class TestTags:

    def test_source_tag(self) -> None:
        assert source_tag(Network.MAINNET) == "a"
        assert source_tag(Network.TESTNET) == "b"
        assert source_tag(Network.LOCAL) == "b"

    def test_chain_label(self) -> None:
        assert chain_label(Network.MAINNET) == "Arbitrum"
        assert chain_label(Network.TESTNET) == "ArbitrumGoerli"
