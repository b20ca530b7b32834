"""Wire-level actions, the signed envelope, and the response status.

Field order and names here are what the exchange parses; serialize with
``to_wire()`` (camelCase aliases).  The ``type`` discriminator is always
the first key.
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from core.errors import EncodingFailure


class WireModel(BaseModel):
    """Base for everything that goes on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ── Orders ──────────────────────────────────────────────────────────


class LimitWire(WireModel):
    tif: str


class TriggerWire(WireModel):
    trigger_px: str
    is_market: bool
    tpsl: str


class OrderTypeWire(WireModel):
    limit: Optional[LimitWire] = None
    trigger: Optional[TriggerWire] = None


class OrderWire(WireModel):
    asset: int
    is_buy: bool
    limit_px: str
    sz: str
    reduce_only: bool
    order_type: OrderTypeWire
    cloid: Optional[str] = None


class BulkOrderAction(WireModel):
    type: Literal["order"] = "order"
    grouping: str = "na"
    orders: list[OrderWire]


# ── Cancels ─────────────────────────────────────────────────────────


class CancelWire(WireModel):
    asset: int
    oid: int


class BulkCancelAction(WireModel):
    type: Literal["cancel"] = "cancel"
    cancels: list[CancelWire]


# ── Margin / leverage ───────────────────────────────────────────────


class UpdateLeverageAction(WireModel):
    type: Literal["updateLeverage"] = "updateLeverage"
    asset: int
    is_cross: bool
    leverage: int


class UpdateIsolatedMarginAction(WireModel):
    type: Literal["updateIsolatedMargin"] = "updateIsolatedMargin"
    asset: int
    is_buy: bool = True
    ntli: int


# ── Typed-data actions ──────────────────────────────────────────────


class UsdTransferPayload(WireModel):
    destination: str
    amount: str
    time: int


class UsdTransferAction(WireModel):
    type: Literal["usdTransfer"] = "usdTransfer"
    chain: str
    payload: UsdTransferPayload


class AgentWire(WireModel):
    source: str
    connection_id: str


class ConnectAction(WireModel):
    type: Literal["connect"] = "connect"
    chain: str
    agent: AgentWire
    agent_address: str


Action = Union[
    BulkOrderAction,
    BulkCancelAction,
    UpdateLeverageAction,
    UpdateIsolatedMarginAction,
    UsdTransferAction,
    ConnectAction,
]


# ── Envelope ────────────────────────────────────────────────────────


class Signature(WireModel):
    r: str
    s: str
    v: int


class SignedEnvelope(WireModel):
    """Body POSTed to ``/exchange``.

    ``vaultAddress`` is always present (``null`` without a vault).
    """

    action: dict[str, Any]
    signature: Signature
    nonce: int
    vault_address: Optional[str] = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# ── Response ────────────────────────────────────────────────────────


class ExchangeResponseStatus(BaseModel):
    """Tagged ``ok`` / ``err`` status; ``response`` is left opaque."""

    model_config = ConfigDict(frozen=True)

    status: Literal["ok", "err"]
    response: Any = None

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def parse(cls, body: Any) -> ExchangeResponseStatus:
        try:
            return cls.model_validate(body)
        except ValidationError as exc:
            raise EncodingFailure(f"unexpected exchange response: {body!r}") from exc
