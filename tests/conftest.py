"""Shared test fixtures and fakes."""
from __future__ import annotations

import asyncio
import textwrap
from pathlib import Path
from typing import Any

import pytest

from lino_transport.config import TransportConfig
from lino_transport.models import CommitResult, QueryResponse, TxResult
from lino_transport.transport import Transport


# ---------------------------------------------------------------------------
# Fake node
# ---------------------------------------------------------------------------


class FakeNode:
    """In-memory node that records calls and serves scripted responses."""

    def __init__(self) -> None:
        self.responses: dict[tuple[str, bytes], QueryResponse] = {}
        self.delays: dict[bytes, float] = {}
        self.query_calls: list[tuple[str, bytes, int, bool]] = []
        self.broadcasts: list[bytes] = []
        self.cancelled: list[bytes] = []
        self.commit = CommitResult(
            check_tx=TxResult(), deliver_tx=TxResult(), hash="ABCDEF", height=42
        )
        self.broadcast_error: Exception | None = None

    async def abci_query(
        self, path: str, data: bytes, height: int = 0, trusted: bool = True
    ) -> QueryResponse:
        self.query_calls.append((path, data, height, trusted))
        delay = self.delays.get(data, 0)
        if delay:
            try:
                await asyncio.sleep(delay)
            except asyncio.CancelledError:
                self.cancelled.append(data)
                raise
        return self.responses.get((path, data), QueryResponse(value=b""))

    async def broadcast_tx_commit(self, tx: bytes) -> CommitResult:
        self.broadcasts.append(tx)
        if self.broadcast_error is not None:
            raise self.broadcast_error
        return self.commit

    async def block(self, height: int) -> dict[str, Any]:
        return {"block": {"header": {"height": str(height)}}}

    async def status(self) -> dict[str, Any]:
        return {"sync_info": {"latest_block_height": "100"}}


@pytest.fixture()
def fake_node() -> FakeNode:
    return FakeNode()


@pytest.fixture()
def transport(fake_node: FakeNode) -> Transport:
    return Transport(fake_node, chain_id="test-chain", query_timeout=0.5)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_config() -> TransportConfig:
    return TransportConfig(
        node_url="http://node.example.com:26657",
        chain_id="test-chain",
        query_timeout=2.0,
        rpc_timeout=10.0,
    )


SAMPLE_YAML = textwrap.dedent("""\
    node_url: "node.example.com:26657"
    chain_id: lino-testnet
    query_timeout: 3
    rpc_timeout: 20
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LINO_NODE_URL", "LINO_CHAIN_ID", "LINO_QUERY_TIMEOUT", "LINO_RPC_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
