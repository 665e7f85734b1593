"""Tendermint JSON-RPC node client over HTTP."""
from __future__ import annotations

import asyncio
import base64
import binascii
import itertools
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import DEFAULT_NODE_URL
from ..errors import NodeError
from ..models import CommitResult, QueryResponse, TxResult

logger = logging.getLogger(__name__)


def _normalize_url(node_url: str) -> str:
    url = node_url or DEFAULT_NODE_URL
    if "://" not in url:
        url = f"http://{url}"
    # Tendermint also exposes "/websocket"; JSON-RPC over HTTP posts to root.
    return url.rstrip("/")


def _b64decode(value: str | None) -> bytes | None:
    if value is None:
        return None
    try:
        return base64.b64decode(value)
    except (binascii.Error, ValueError) as e:
        raise NodeError(f"Malformed base64 in node response: {e}") from e


def _parse_tx_result(raw: dict[str, Any] | None) -> TxResult:
    raw = raw or {}
    return TxResult(
        code=int(raw.get("code", 0) or 0),
        log=raw.get("log", "") or "",
        data=_b64decode(raw.get("data")),
        gas_wanted=int(raw.get("gas_wanted", 0) or 0),
        gas_used=int(raw.get("gas_used", 0) or 0),
    )


class TendermintClient:
    """Tendermint RPC client; one HTTP request per call, no retries."""

    def __init__(self, node_url: str = DEFAULT_NODE_URL, rpc_timeout: float = 60.0) -> None:
        self.node_url = _normalize_url(node_url)
        self.timeout = rpc_timeout
        self._ids = itertools.count(1)

    async def rpc_call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """Make a JSON-RPC call and return its ``result`` object."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(
                    self.node_url,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    result = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("RPC %s to %s failed: %s", method, self.node_url, e)
            raise NodeError(f"RPC {method} failed: {e}") from e

        if not isinstance(result, dict):
            raise NodeError(f"RPC {method} returned malformed response")

        error = result.get("error")
        if error:
            logger.warning("RPC %s returned error: %s", method, error)
            raise NodeError(
                f"RPC Error: {error.get('message', '')}",
                code=error.get("code"),
                data=str(error.get("data", "")),
            )

        return result.get("result", {}) or {}

    async def abci_query(
        self, path: str, data: bytes, height: int = 0, trusted: bool = True
    ) -> QueryResponse:
        result = await self.rpc_call(
            "abci_query",
            {
                "path": path,
                "data": data.hex(),
                "height": str(height),
                "prove": not trusted,
            },
        )
        resp = result.get("response", {})
        return QueryResponse(
            code=int(resp.get("code", 0) or 0),
            log=resp.get("log", "") or "",
            value=_b64decode(resp.get("value")),
            height=int(resp.get("height", 0) or 0),
        )

    async def broadcast_tx_commit(self, tx: bytes) -> CommitResult:
        result = await self.rpc_call(
            "broadcast_tx_commit", {"tx": base64.b64encode(tx).decode("ascii")}
        )
        return CommitResult(
            check_tx=_parse_tx_result(result.get("check_tx")),
            deliver_tx=_parse_tx_result(result.get("deliver_tx")),
            hash=result.get("hash", ""),
            height=int(result.get("height", 0) or 0),
        )

    async def block(self, height: int) -> dict[str, Any]:
        return await self.rpc_call("block", {"height": str(height)})

    async def status(self) -> dict[str, Any]:
        return await self.rpc_call("status", {})
