"""Protocol constants shared by the signer and the exchange client."""

from __future__ import annotations

# ── API endpoints ───────────────────────────────────────────────────
MAINNET_API_URL = "https://api.hyperliquid.xyz"
TESTNET_API_URL = "https://api.hyperliquid-testnet.xyz"
LOCAL_API_URL = "http://localhost:3001"

EXCHANGE_PATH = "/exchange"
INFO_PATH = "/info"

# ── EIP-712 domain ──────────────────────────────────────────────────
DOMAIN_NAME = "Exchange"
DOMAIN_VERSION = "1"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

MAINNET_CHAIN_ID = 42161  # Arbitrum One
TESTNET_CHAIN_ID = 421613  # Arbitrum Goerli
LOCAL_CHAIN_ID = 1337

MAINNET_CHAIN_LABEL = "Arbitrum"
TESTNET_CHAIN_LABEL = "ArbitrumGoerli"

# Source tag carried by the Agent struct of L1 actions.
MAINNET_SOURCE = "a"
TESTNET_SOURCE = "b"

# Source carried by the Agent struct when the main wallet approves an agent.
AGENT_SOURCE_URL = "https://hyperliquid.xyz"

# ── Action encoding ─────────────────────────────────────────────────
GROUPING_NA = "na"
GROUPING_CODES: dict[str, int] = {GROUPING_NA: 0}

MARGIN_SCALE = 1_000_000
HASH_PRICE_SCALE = 100_000_000
