"""Transport: queries node state and broadcasts transactions.

Every ``query*`` call runs its round-trip as its own task and waits on that
task with the configured deadline. The task is the completion signal for that
call only, so a late answer can never be mistaken for the result of a later
call. On timeout the task is cancelled together with its HTTP request.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from .codec import JsonCodec
from .config import DEFAULT_NODE_URL, TransportConfig
from .errors import (
    ConfigurationError,
    DecodeError,
    EmptyResultError,
    QueryTimeoutError,
    RemoteQueryError,
)
from .interfaces.codec import Codec
from .interfaces.node import Node
from .models import CommitResult, KVPair
from .rpc.tendermint import TendermintClient

logger = logging.getLogger(__name__)

KEY_ENDPOINT = "key"
SUBSPACE_ENDPOINT = "subspace"


def store_path(store_name: str, endpoint: str) -> str:
    """Build the ABCI store route, e.g. ``/store/account/key``."""
    return f"/store/{store_name}/{endpoint}"


class Transport:
    """Wrapper around a node client and a codec."""

    def __init__(
        self,
        node: Node | None,
        chain_id: str,
        query_timeout: float,
        codec: Codec | None = None,
    ) -> None:
        self._node = node
        self._chain_id = chain_id
        self._query_timeout = query_timeout
        self.codec: Codec = codec if codec is not None else JsonCodec()

    @classmethod
    def from_config(cls, config: TransportConfig, codec: Codec | None = None) -> Transport:
        node = TendermintClient(config.node_url, rpc_timeout=config.rpc_timeout)
        return cls(node, config.chain_id, config.query_timeout, codec=codec)

    @classmethod
    def from_args(
        cls,
        chain_id: str,
        node_url: str,
        query_timeout: float,
        codec: Codec | None = None,
    ) -> Transport:
        node = TendermintClient(node_url or DEFAULT_NODE_URL)
        return cls(node, chain_id, query_timeout, codec=codec)

    @property
    def chain_id(self) -> str:
        return self._chain_id

    @property
    def query_timeout(self) -> float:
        return self._query_timeout

    def get_node(self) -> Node:
        """Return the node client, or fail if none is configured."""
        if self._node is None:
            raise ConfigurationError("missing node URL")
        return self._node

    # ------------------------------------------------------------------
    # Store queries
    # ------------------------------------------------------------------

    async def query(self, key: bytes, store_name: str, height: int = 0) -> bytes:
        """Query ``key`` in ``store_name`` at ``height`` (0 means latest)."""
        return await self._with_timeout(
            self._query(key, store_name, KEY_ENDPOINT, height), "query timeout"
        )

    async def query_at_height(self, key: bytes, store_name: str, height: int) -> bytes:
        """Query ``key`` in ``store_name`` at an explicit block height."""
        return await self._with_timeout(
            self._query(key, store_name, KEY_ENDPOINT, height),
            f"query at height {height} timeout",
        )

    async def query_subspace(self, prefix: bytes, store_name: str) -> list[KVPair]:
        """Query every key/value pair under ``prefix``, in node order."""
        raw = await self._with_timeout(
            self._query(prefix, store_name, SUBSPACE_ENDPOINT, 0),
            "query subspace timeout",
        )
        try:
            return self.codec.decode_kv_pairs(raw)
        except (ValueError, KeyError, TypeError) as e:
            raise DecodeError(f"Failed to decode subspace payload: {e}", cause=e) from e

    async def _with_timeout(self, coro: Any, timeout_message: str) -> Any:
        task = asyncio.ensure_future(coro)
        try:
            # wait_for cancels the task when the deadline passes.
            return await asyncio.wait_for(task, self._query_timeout)
        except asyncio.TimeoutError as e:
            logger.warning("%s after %.2fs", timeout_message, self._query_timeout)
            raise QueryTimeoutError(timeout_message, cause=e) from e

    async def _query(
        self, key: bytes, store_name: str, endpoint: str, height: int
    ) -> bytes:
        path = store_path(store_name, endpoint)
        node = self.get_node()

        logger.debug("ABCI query %s key=%s height=%d", path, key.hex(), height)
        resp = await node.abci_query(path, key, height=height, trusted=True)

        if resp.code != 0:
            raise RemoteQueryError(resp.code, resp.log)

        if not resp.value:
            raise EmptyResultError("Empty response!")

        return resp.value

    # ------------------------------------------------------------------
    # Blocks and status
    # ------------------------------------------------------------------

    async def query_block(self, height: int) -> dict[str, Any]:
        """Fetch the block at ``height``."""
        node = self.get_node()
        return await node.block(height)

    async def query_block_status(self) -> dict[str, Any]:
        """Fetch the node status (latest block, sync info)."""
        node = self.get_node()
        return await node.status()

    # ------------------------------------------------------------------
    # Broadcast
    # ------------------------------------------------------------------

    async def broadcast_tx(self, tx: bytes) -> CommitResult:
        """Broadcast ``tx`` and wait until the node reports the commit."""
        node = self.get_node()
        logger.debug("Broadcasting tx (%d bytes)", len(tx))
        result = await node.broadcast_tx_commit(tx)
        logger.info("Tx %s committed at height %d", result.hash, result.height)
        return result
