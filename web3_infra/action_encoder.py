"""ActionEncoder — canonical tuples, wire actions, and connection ids.

Each L1 action is hashed as ``keccak(abi_encode(types, values))`` where
``values`` is a fixed-arity tuple ending in ``(vault_or_zero, nonce)``.
The exchange rebuilds the same tuple from the submitted JSON, so field
order, ABI types, and numeric scaling here are part of the wire contract.

Numeric conversions run on ``Decimal``.  Decimal and string inputs must be
exact at the wire precision; floats are snapped to it within the
tolerances of ``core.numbers``.  Anything else is an ``EncodingFailure``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Union

import structlog
from eth_abi import encode as abi_encode
from eth_utils import keccak, to_checksum_address

from config.constants import (
    GROUPING_CODES,
    GROUPING_NA,
    HASH_PRICE_SCALE,
    MARGIN_SCALE,
    ZERO_ADDRESS,
)
from core.errors import EncodingFailure
from core.numbers import float_to_decimal, float_to_int_for_hashing
from models.actions import (
    Action,
    AgentWire,
    BulkCancelAction,
    BulkOrderAction,
    CancelWire,
    ConnectAction,
    LimitWire,
    OrderTypeWire,
    OrderWire,
    TriggerWire,
    UpdateIsolatedMarginAction,
    UpdateLeverageAction,
    UsdTransferAction,
    UsdTransferPayload,
)
from models.order import (
    ClientCancelRequest,
    ClientOrderRequest,
    LimitOrderType,
    OrderType,
    Tif,
    Tpsl,
    TriggerOrderType,
)
from web3_infra.asset_index import AssetIndex

logger = structlog.get_logger("web3_infra.action_encoder")

Number = Union[Decimal, int, float, str]

_WIRE_PLACES = Decimal("0.00000001")
_ONE = Decimal("1")

ORDER_TUPLE_TYPE = "(uint32,bool,uint64,uint64,bool,uint8,uint64)"
ORDER_TUPLE_TYPE_WITH_CLOID = "(uint32,bool,uint64,uint64,bool,uint8,uint64,bytes16)"
CANCEL_TUPLE_TYPE = "(uint32,uint64)"

_TIF_CODES: dict[Tif, int] = {Tif.ALO: 1, Tif.GTC: 2, Tif.IOC: 3}
_TRIGGER_CODES: dict[tuple[bool, Tpsl], int] = {
    (True, Tpsl.TP): 4,
    (False, Tpsl.TP): 5,
    (True, Tpsl.SL): 6,
    (False, Tpsl.SL): 7,
}


# ── Numeric encoding ────────────────────────────────────────────────


def to_decimal(value: Number) -> Decimal:
    """Exact ``Decimal`` of *value*; floats go through their shortest repr."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise EncodingFailure(f"not a number: {value!r}") from exc


def decimal_to_wire(value: Number) -> str:
    """Render *value* with at most 8 decimals and no trailing zeros.

    Raises ``EncodingFailure`` if *value* has more than 8 significant
    decimals.  A float only needs to be within 1e-12 of its 8-decimal form.
    """
    if isinstance(value, float):
        value = float_to_decimal(value)
    x = to_decimal(value)
    rounded = x.quantize(_WIRE_PLACES, rounding=ROUND_HALF_UP)
    if rounded != x:
        raise EncodingFailure(f"{value!r} has more than 8 decimals")
    if rounded == 0:
        return "0"
    return format(rounded.normalize(), "f")


def decimal_to_int_for_hashing(value: Number) -> int:
    """Scale *value* by 1e8 to the integer that enters the order hash."""
    if isinstance(value, float):
        return float_to_int_for_hashing(value)
    scaled = to_decimal(value) * HASH_PRICE_SCALE
    integral = scaled.to_integral_value(rounding=ROUND_HALF_UP)
    if integral != scaled:
        raise EncodingFailure(f"{value!r} cannot be hashed at 1e-8 precision")
    return int(integral)


def scale_margin(amount: Number) -> int:
    """USD amount → integer micro-USD, rounding half away from zero.

    >>> scale_margin("1.234567")
    1234567
    >>> scale_margin("0.0000001")
    0
    """
    scaled = to_decimal(amount) * MARGIN_SCALE
    return int(scaled.quantize(_ONE, rounding=ROUND_HALF_UP))


def normalize_address(address: Optional[str]) -> str:
    """Checksummed *address*, or the zero address when absent."""
    if not address:
        return ZERO_ADDRESS
    try:
        return to_checksum_address(address)
    except (ValueError, TypeError) as exc:
        raise EncodingFailure(f"invalid address: {address!r}") from exc


# ── Hashing ─────────────────────────────────────────────────────────


def connection_id(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """``keccak256`` of the ABI encoding of *values* as *types*."""
    try:
        encoded = abi_encode(list(types), list(values))
    except Exception as exc:  # noqa: BLE001  eth_abi raises several unrelated types
        raise EncodingFailure(f"ABI encoding failed for {list(types)}: {exc}") from exc
    return keccak(encoded)


def agent_connection_id(agent_address: str) -> bytes:
    """Connection id authorizing *agent_address*: hash of the address alone."""
    return connection_id(["address"], [normalize_address(agent_address)])


# ── Order helpers ───────────────────────────────────────────────────


def order_type_to_tuple(order_type: OrderType) -> tuple[int, int]:
    """``(type_code, trigger_px_for_hashing)``."""
    if isinstance(order_type, LimitOrderType):
        return _TIF_CODES[order_type.tif], 0
    if isinstance(order_type, TriggerOrderType):
        code = _TRIGGER_CODES[(order_type.is_market, order_type.tpsl)]
        return code, decimal_to_int_for_hashing(order_type.trigger_px)
    raise EncodingFailure(f"unknown order type: {order_type!r}")


def order_type_to_wire(order_type: OrderType) -> OrderTypeWire:
    if isinstance(order_type, LimitOrderType):
        return OrderTypeWire(limit=LimitWire(tif=order_type.tif.value))
    if isinstance(order_type, TriggerOrderType):
        return OrderTypeWire(
            trigger=TriggerWire(
                trigger_px=decimal_to_wire(order_type.trigger_px),
                is_market=order_type.is_market,
                tpsl=order_type.tpsl.value,
            )
        )
    raise EncodingFailure(f"unknown order type: {order_type!r}")


# ── Encoder ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EncodedAction:
    """A wire action and, for L1 actions, the hash that gets signed."""

    action: Action
    connection_id: Optional[bytes] = None

    def action_wire(self) -> dict[str, Any]:
        return self.action.to_wire()

    def signing_hash(self) -> bytes:
        if self.connection_id is None:
            raise EncodingFailure(
                f"{type(self.action).__name__} carries no connection id to sign"
            )
        return self.connection_id


class ActionEncoder:
    """Turns client intents into canonical actions and their hashes.

    Parameters
    ----------
    asset_index:
        Resolves symbols to wire-level asset indices.

    Every method takes the vault address (``None`` for none) and the
    millisecond timestamp explicitly; the encoder holds no other state.
    """

    def __init__(self, asset_index: AssetIndex) -> None:
        self._assets = asset_index

    @property
    def asset_index(self) -> AssetIndex:
        return self._assets

    # ── Orders ──────────────────────────────────────────────────

    def order_tuple(self, order: ClientOrderRequest) -> tuple[Any, ...]:
        """Canonical hash tuple of a single order."""
        type_code, trigger_px = order_type_to_tuple(order.order_type)
        fields: tuple[Any, ...] = (
            self._assets.resolve(order.asset),
            order.is_buy,
            decimal_to_int_for_hashing(order.limit_px),
            decimal_to_int_for_hashing(order.sz),
            order.reduce_only,
            type_code,
            trigger_px,
        )
        if order.cloid is not None:
            fields += (order.cloid.to_bytes(),)
        return fields

    def order_wire(self, order: ClientOrderRequest) -> OrderWire:
        return OrderWire(
            asset=self._assets.resolve(order.asset),
            is_buy=order.is_buy,
            limit_px=decimal_to_wire(order.limit_px),
            sz=decimal_to_wire(order.sz),
            reduce_only=order.reduce_only,
            order_type=order_type_to_wire(order.order_type),
            cloid=str(order.cloid) if order.cloid is not None else None,
        )

    def encode_orders(
        self,
        orders: Sequence[ClientOrderRequest],
        vault_address: Optional[str],
        timestamp: int,
    ) -> EncodedAction:
        """Bulk order: ``(order_tuples, grouping_code, vault_or_zero, nonce)``.

        Either every order carries a cloid or none does.  Any unresolved
        symbol aborts the whole batch.
        """
        if not orders:
            raise EncodingFailure("order batch is empty")

        with_cloid = [o.cloid is not None for o in orders]
        if any(with_cloid) and not all(with_cloid):
            raise EncodingFailure(
                "all orders must have cloids if at least one has a cloid"
            )

        tuples = [self.order_tuple(o) for o in orders]
        wires = [self.order_wire(o) for o in orders]

        tuple_type = ORDER_TUPLE_TYPE_WITH_CLOID if all(with_cloid) else ORDER_TUPLE_TYPE
        conn_id = connection_id(
            [f"{tuple_type}[]", "uint8", "address", "uint64"],
            [tuples, GROUPING_CODES[GROUPING_NA], normalize_address(vault_address), timestamp],
        )
        action = BulkOrderAction(grouping=GROUPING_NA, orders=wires)
        logger.debug(
            "action_encoder.orders",
            count=len(orders),
            connection_id=conn_id.hex(),
        )
        return EncodedAction(action=action, connection_id=conn_id)

    # ── Cancels ─────────────────────────────────────────────────

    def encode_cancels(
        self,
        cancels: Sequence[ClientCancelRequest],
        vault_address: Optional[str],
        timestamp: int,
    ) -> EncodedAction:
        """Bulk cancel: ``(cancel_tuples, vault_or_zero, nonce)``."""
        if not cancels:
            raise EncodingFailure("cancel batch is empty")

        wires = [
            CancelWire(asset=self._assets.resolve(c.asset), oid=c.oid)
            for c in cancels
        ]
        tuples = [(w.asset, w.oid) for w in wires]
        conn_id = connection_id(
            [f"{CANCEL_TUPLE_TYPE}[]", "address", "uint64"],
            [tuples, normalize_address(vault_address), timestamp],
        )
        return EncodedAction(action=BulkCancelAction(cancels=wires), connection_id=conn_id)

    # ── Leverage / margin ───────────────────────────────────────

    def encode_update_leverage(
        self,
        symbol: str,
        leverage: int,
        is_cross: bool,
        vault_address: Optional[str],
        timestamp: int,
    ) -> EncodedAction:
        asset = self._assets.resolve(symbol)
        conn_id = connection_id(
            ["uint32", "bool", "uint32", "address", "uint64"],
            [asset, is_cross, leverage, normalize_address(vault_address), timestamp],
        )
        action = UpdateLeverageAction(asset=asset, is_cross=is_cross, leverage=leverage)
        return EncodedAction(action=action, connection_id=conn_id)

    def encode_update_isolated_margin(
        self,
        symbol: str,
        amount: Number,
        vault_address: Optional[str],
        timestamp: int,
    ) -> EncodedAction:
        """``ntli`` is the amount in micro-USD; ``isBuy`` is always true."""
        asset = self._assets.resolve(symbol)
        ntli = scale_margin(amount)
        conn_id = connection_id(
            ["uint32", "bool", "int64", "address", "uint64"],
            [asset, True, ntli, normalize_address(vault_address), timestamp],
        )
        action = UpdateIsolatedMarginAction(asset=asset, is_buy=True, ntli=ntli)
        return EncodedAction(action=action, connection_id=conn_id)

    # ── Typed-data actions ──────────────────────────────────────

    @staticmethod
    def encode_usd_transfer(
        destination: str,
        amount: Union[str, Decimal],
        timestamp: int,
        chain: str,
    ) -> EncodedAction:
        """No tuple hash: the typed payload itself is what gets signed."""
        amount_str = amount if isinstance(amount, str) else format(amount, "f")
        payload = UsdTransferPayload(destination=destination, amount=amount_str, time=timestamp)
        return EncodedAction(action=UsdTransferAction(chain=chain, payload=payload))

    @staticmethod
    def encode_connect(agent_address: str, source: str, chain: str) -> EncodedAction:
        conn_id = agent_connection_id(agent_address)
        action = ConnectAction(
            chain=chain,
            agent=AgentWire(source=source, connection_id="0x" + conn_id.hex()),
            agent_address=normalize_address(agent_address),
        )
        return EncodedAction(action=action, connection_id=conn_id)
