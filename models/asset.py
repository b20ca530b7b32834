"""Exchange metadata — the perpetuals universe published by ``/info``."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetMeta(BaseModel):
    """One instrument of the universe.  Its list position is its index."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    name: str = Field(..., min_length=1)
    sz_decimals: int = Field(default=0, ge=0, alias="szDecimals")
    max_leverage: Optional[int] = Field(default=None, alias="maxLeverage")
    only_isolated: bool = Field(default=False, alias="onlyIsolated")


class Meta(BaseModel):
    """Response of ``{"type": "meta"}``."""

    model_config = ConfigDict(extra="allow", frozen=True)

    universe: list[AssetMeta] = Field(default_factory=list)

    @property
    def symbols(self) -> list[str]:
        return [asset.name for asset in self.universe]
