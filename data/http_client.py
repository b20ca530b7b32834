"""HttpClient — thin async JSON POST transport over httpx.

No retries: a signed action carries a timestamp nonce, so resubmitting
it blindly is never safe.  Failures surface as ``TransportFailure``.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
import structlog

from core.errors import EncodingFailure, TransportFailure

logger = structlog.get_logger("data.http_client")


class HttpClient:
    """POST JSON to ``base_url + path`` and decode the JSON reply.

    Parameters
    ----------
    base_url:
        API root, e.g. ``https://api.hyperliquid.xyz``.
    timeout:
        Request timeout in seconds.
    client:
        Optional shared ``httpx.AsyncClient``.  A client passed in is
        never closed by ``aclose()``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def post(self, path: str, payload: dict[str, Any]) -> Any:
        url = f"{self._base_url}{path}"
        try:
            resp = await self._client.post(url, json=payload, timeout=self._timeout)
        except httpx.HTTPError as exc:
            logger.warning("http_client.post_failed", url=url, error=str(exc))
            raise TransportFailure(f"POST {path} failed: {exc}") from exc

        if resp.status_code // 100 != 2:
            logger.warning(
                "http_client.bad_status",
                url=url,
                status_code=resp.status_code,
                body=resp.text[:500],
            )
            raise TransportFailure(
                f"POST {path} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise EncodingFailure(f"non-JSON response from {path}: {resp.text[:200]!r}") from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()
