"""Client-side order and cancel intents, referencing assets by symbol."""

from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.errors import EncodingFailure
from core.numbers import float_to_decimal

_CLOID_RE = re.compile(r"^0x[0-9a-fA-F]{32}$")


def _snap_float(v: Any) -> Any:
    """Floats land on the 8-decimal grid; other inputs pass through."""
    if isinstance(v, float):
        try:
            return float_to_decimal(v)
        except EncodingFailure as exc:
            raise ValueError(str(exc)) from exc
    return v


class Tif(str, Enum):
    """Time-in-force of a limit order."""

    ALO = "Alo"  # Add-Liquidity-Only (post only)
    IOC = "Ioc"  # Immediate-Or-Cancel
    GTC = "Gtc"  # Good-Til-Cancelled


class Tpsl(str, Enum):
    """Trigger kind."""

    TP = "tp"
    SL = "sl"


class Cloid(BaseModel):
    """16-byte client order id, written as ``0x`` + 32 hex chars."""

    model_config = ConfigDict(frozen=True)

    raw: str

    @field_validator("raw")
    @classmethod
    def check_format(cls, v: str) -> str:
        if not _CLOID_RE.match(v):
            raise ValueError("cloid must be 0x followed by 32 hex characters")
        return v.lower()

    @classmethod
    def from_int(cls, value: int) -> Cloid:
        return cls(raw=f"0x{value:032x}")

    @classmethod
    def from_str(cls, value: str) -> Cloid:
        return cls(raw=value)

    def to_bytes(self) -> bytes:
        return bytes.fromhex(self.raw[2:])

    def __str__(self) -> str:
        return self.raw


class LimitOrderType(BaseModel):
    model_config = ConfigDict(frozen=True)

    tif: Tif = Tif.GTC


class TriggerOrderType(BaseModel):
    model_config = ConfigDict(frozen=True)

    trigger_px: Decimal = Field(..., gt=0)
    is_market: bool
    tpsl: Tpsl

    @field_validator("trigger_px", mode="before")
    @classmethod
    def snap_trigger_px(cls, v: Any) -> Any:
        return _snap_float(v)


OrderType = Union[LimitOrderType, TriggerOrderType]


class ClientOrderRequest(BaseModel):
    """Order as the caller describes it (symbol, human prices)."""

    model_config = ConfigDict(frozen=True)

    asset: str = Field(..., min_length=1, description="Instrument symbol")
    is_buy: bool
    limit_px: Decimal = Field(..., gt=0)
    sz: Decimal = Field(..., gt=0)
    reduce_only: bool = False
    order_type: OrderType = Field(default_factory=LimitOrderType)
    cloid: Optional[Cloid] = None

    @field_validator("limit_px", "sz", mode="before")
    @classmethod
    def snap_prices(cls, v: Any) -> Any:
        return _snap_float(v)


class ClientCancelRequest(BaseModel):
    """Cancel of a resting order by exchange order id."""

    model_config = ConfigDict(frozen=True)

    asset: str = Field(..., min_length=1)
    oid: int = Field(..., ge=0)
