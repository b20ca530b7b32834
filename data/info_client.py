"""InfoClient — read-only metadata queries against ``/info``."""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError

from config.constants import INFO_PATH
from core.errors import EncodingFailure
from data.http_client import HttpClient
from models.asset import Meta

logger = structlog.get_logger("data.info_client")


class InfoClient:
    """Fetches the perpetuals universe used to build the asset index."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    async def meta(self) -> Meta:
        body: Any = await self._http.post(INFO_PATH, {"type": "meta"})
        try:
            meta = Meta.model_validate(body)
        except ValidationError as exc:
            raise EncodingFailure(f"unexpected meta response: {exc}") from exc
        logger.info("info_client.meta", assets=len(meta.universe))
        return meta
