"""ExchangeClient — resolve, encode, sign and submit exchange actions.

Every public call is one linear pipeline::

    now_ms() → resolve symbols → encode + hash → sign → envelope → POST /exchange → status

The timestamp is read once per call and used both as the envelope nonce
and inside the signed hash.  Nothing is cached between calls apart from
the asset index, the signer and the network chosen at construction.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any, Callable, Optional, Protocol, Union

import structlog

from config.constants import AGENT_SOURCE_URL, EXCHANGE_PATH, MAINNET_API_URL
from config.settings import Settings, settings as default_settings
from core.clock import now_ms
from core.errors import SigningFailure
from data.http_client import HttpClient
from data.info_client import InfoClient
from models.actions import ExchangeResponseStatus, Signature, SignedEnvelope
from models.asset import Meta
from models.order import ClientCancelRequest, ClientOrderRequest
from web3_infra.action_encoder import ActionEncoder, EncodedAction, Number, normalize_address
from web3_infra.asset_index import AssetIndex
from web3_infra.keys import KeySource, generate_agent_key, key_to_hex, secure_random_key
from web3_infra.signing_domain import Network, chain_label
from web3_infra.typed_data_signer import TypedDataSigner

logger = structlog.get_logger("execution.exchange_client")

Clock = Callable[[], int]


class Transport(Protocol):
    """What the client needs from the HTTP layer."""

    async def post(self, path: str, payload: dict[str, Any]) -> Any: ...


class ExchangeClient:
    """Signs and submits actions for one wallet on one network.

    Parameters
    ----------
    signer:
        Wallet signer.
    asset_index:
        Symbol → asset index, built from the exchange universe.
    transport:
        Object with ``async post(path, payload)``; normally ``HttpClient``.
    network:
        Network the signatures are scoped to.
    vault_address:
        Optional sub-account the actions are executed for.
    key_source:
        Source of agent keys for ``approve_agent``.
    clock:
        Millisecond clock used for nonces.
    """

    def __init__(
        self,
        signer: TypedDataSigner,
        asset_index: AssetIndex,
        transport: Transport,
        network: Network = Network.MAINNET,
        vault_address: Optional[str] = None,
        key_source: KeySource = secure_random_key,
        clock: Clock = now_ms,
    ) -> None:
        self._signer = signer
        self._encoder = ActionEncoder(asset_index)
        self._transport = transport
        self._network = network
        self._vault_address = normalize_address(vault_address) if vault_address else None
        self._key_source = key_source
        self._clock = clock

    # ── Construction ─────────────────────────────────────────────

    @classmethod
    async def create(
        cls,
        private_key: str,
        base_url: Optional[str] = None,
        network: Optional[Network] = None,
        meta: Optional[Meta] = None,
        vault_address: Optional[str] = None,
        http: Optional[HttpClient] = None,
        timeout: float = 10.0,
        key_source: KeySource = secure_random_key,
    ) -> ExchangeClient:
        """Build a client, fetching the universe from ``/info`` when *meta* is absent.

        *network* defaults to the one inferred from *base_url*.
        """
        base_url = base_url or MAINNET_API_URL
        signer = TypedDataSigner(private_key)
        owns_http = http is None
        http = http or HttpClient(base_url, timeout=timeout)
        network = network or Network.from_base_url(base_url)
        try:
            if meta is None:
                meta = await InfoClient(http).meta()
            client = cls(
                signer=signer,
                asset_index=AssetIndex.from_meta(meta),
                transport=http,
                network=network,
                vault_address=vault_address,
                key_source=key_source,
            )
        except Exception:
            if owns_http:
                await http.aclose()
            raise
        logger.info(
            "exchange_client.created",
            network=network.value,
            base_url=base_url,
            address=client.address,
            assets=len(meta.universe),
            vault_address=client.vault_address,
        )
        return client

    @classmethod
    async def from_settings(
        cls,
        config: Settings = default_settings,
        meta: Optional[Meta] = None,
    ) -> ExchangeClient:
        if not config.HL_PRIVATE_KEY:
            raise SigningFailure("HL_PRIVATE_KEY is not configured")
        network = Network(config.HL_NETWORK) if config.HL_NETWORK else None
        return await cls.create(
            private_key=config.HL_PRIVATE_KEY,
            base_url=config.HL_API_URL,
            network=network,
            meta=meta,
            vault_address=config.HL_VAULT_ADDRESS or None,
            timeout=config.HL_HTTP_TIMEOUT_SECONDS,
        )

    # ── Properties ───────────────────────────────────────────────

    @property
    def address(self) -> str:
        return self._signer.address

    @property
    def network(self) -> Network:
        return self._network

    @property
    def vault_address(self) -> Optional[str]:
        return self._vault_address

    @property
    def asset_index(self) -> AssetIndex:
        return self._encoder.asset_index

    # ── Transfers ────────────────────────────────────────────────

    async def transfer_usd(
        self,
        amount: Union[str, Decimal],
        destination: str,
    ) -> ExchangeResponseStatus:
        """Send *amount* USD to *destination* (signed as typed data)."""
        timestamp = self._clock()
        encoded = self._encoder.encode_usd_transfer(
            destination, amount, timestamp, chain_label(self._network)
        )
        payload = encoded.action.payload
        signature = self._signer.sign_usd_transfer(
            payload.destination, payload.amount, payload.time, self._network
        )
        return await self._submit(encoded, signature, timestamp)

    # ── Orders ───────────────────────────────────────────────────

    async def order(self, order: ClientOrderRequest) -> ExchangeResponseStatus:
        return await self.bulk_order([order])

    async def bulk_order(
        self,
        orders: Sequence[ClientOrderRequest],
    ) -> ExchangeResponseStatus:
        """Place *orders* atomically: one unknown symbol fails the whole batch."""
        timestamp = self._clock()
        encoded = self._encoder.encode_orders(orders, self._vault_address, timestamp)
        return await self._submit_l1(encoded, timestamp)

    async def cancel(self, cancel: ClientCancelRequest) -> ExchangeResponseStatus:
        return await self.bulk_cancel([cancel])

    async def bulk_cancel(
        self,
        cancels: Sequence[ClientCancelRequest],
    ) -> ExchangeResponseStatus:
        timestamp = self._clock()
        encoded = self._encoder.encode_cancels(cancels, self._vault_address, timestamp)
        return await self._submit_l1(encoded, timestamp)

    # ── Leverage / margin ────────────────────────────────────────

    async def update_leverage(
        self,
        leverage: int,
        symbol: str,
        is_cross: bool = True,
    ) -> ExchangeResponseStatus:
        timestamp = self._clock()
        encoded = self._encoder.encode_update_leverage(
            symbol, leverage, is_cross, self._vault_address, timestamp
        )
        return await self._submit_l1(encoded, timestamp)

    async def update_isolated_margin(
        self,
        amount: Number,
        symbol: str,
    ) -> ExchangeResponseStatus:
        """Add (positive) or remove (negative) *amount* USD of isolated margin."""
        timestamp = self._clock()
        encoded = self._encoder.encode_update_isolated_margin(
            symbol, amount, self._vault_address, timestamp
        )
        return await self._submit_l1(encoded, timestamp)

    # ── Agents ───────────────────────────────────────────────────

    async def approve_agent(self) -> tuple[str, ExchangeResponseStatus]:
        """Generate an agent key and authorize it with the main wallet.

        Returns the agent private key (hex, no ``0x``) with the status.
        """
        timestamp = self._clock()
        key, agent_address = generate_agent_key(self._key_source)
        encoded = self._encoder.encode_connect(
            agent_address, AGENT_SOURCE_URL, chain_label(self._network)
        )
        signature = self._signer.sign_agent_connection(
            encoded.signing_hash(), self._network, AGENT_SOURCE_URL
        )
        logger.info("exchange_client.agent_generated", agent_address=agent_address)
        status = await self._submit(encoded, signature, timestamp)
        return key_to_hex(key), status

    # ── Lifecycle ────────────────────────────────────────────────

    async def aclose(self) -> None:
        """Close the transport if it has anything to close."""
        aclose = getattr(self._transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> ExchangeClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    # ── Internals ────────────────────────────────────────────────

    async def _submit_l1(self, encoded: EncodedAction, timestamp: int) -> ExchangeResponseStatus:
        signature = self._signer.sign_l1_action(encoded.signing_hash(), self._network)
        return await self._submit(encoded, signature, timestamp)

    def build_envelope(
        self,
        encoded: EncodedAction,
        signature: Signature,
        nonce: int,
    ) -> SignedEnvelope:
        return SignedEnvelope(
            action=encoded.action_wire(),
            signature=signature,
            nonce=nonce,
            vault_address=self._vault_address,
        )

    async def _submit(
        self,
        encoded: EncodedAction,
        signature: Signature,
        nonce: int,
    ) -> ExchangeResponseStatus:
        envelope = self.build_envelope(encoded, signature, nonce)
        action_type = envelope.action["type"]
        logger.debug("exchange_client.submitting", action=action_type, nonce=nonce)

        body = await self._transport.post(EXCHANGE_PATH, envelope.to_wire())
        status = ExchangeResponseStatus.parse(body)

        log = logger.info if status.is_ok else logger.warning
        log(
            "exchange_client.submitted",
            action=action_type,
            nonce=nonce,
            status=status.status,
        )
        return status
