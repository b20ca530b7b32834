"""hl-exchange — models package."""

from .actions import (
    Action,
    AgentWire,
    BulkCancelAction,
    BulkOrderAction,
    CancelWire,
    ConnectAction,
    ExchangeResponseStatus,
    OrderWire,
    Signature,
    SignedEnvelope,
    UpdateIsolatedMarginAction,
    UpdateLeverageAction,
    UsdTransferAction,
    UsdTransferPayload,
)
from .asset import AssetMeta, Meta
from .order import (
    ClientCancelRequest,
    ClientOrderRequest,
    Cloid,
    LimitOrderType,
    OrderType,
    Tif,
    Tpsl,
    TriggerOrderType,
)

__all__ = [
    "Action",
    "AgentWire",
    "AssetMeta",
    "BulkCancelAction",
    "BulkOrderAction",
    "CancelWire",
    "ClientCancelRequest",
    "ClientOrderRequest",
    "Cloid",
    "ConnectAction",
    "ExchangeResponseStatus",
    "LimitOrderType",
    "Meta",
    "OrderType",
    "OrderWire",
    "Signature",
    "SignedEnvelope",
    "Tif",
    "Tpsl",
    "TriggerOrderType",
    "UpdateIsolatedMarginAction",
    "UpdateLeverageAction",
    "UsdTransferAction",
    "UsdTransferPayload",
]
