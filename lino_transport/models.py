"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QueryResponse:
    """Application-level answer to an ABCI store query."""

    code: int = 0
    log: str = ""
    value: bytes | None = None
    height: int = 0


@dataclass(frozen=True)
class KVPair:
    """Single key/value entry returned by a subspace query."""

    key: bytes
    value: bytes


@dataclass(frozen=True)
class TxResult:
    """Outcome of one transaction execution phase (check or deliver)."""

    code: int = 0
    log: str = ""
    data: bytes | None = None
    gas_wanted: int = 0
    gas_used: int = 0

    @property
    def is_ok(self) -> bool:
        return self.code == 0


@dataclass(frozen=True)
class CommitResult:
    """Node confirmation that a transaction was committed."""

    check_tx: TxResult
    deliver_tx: TxResult
    hash: str = ""
    height: int = 0

    @property
    def is_ok(self) -> bool:
        return self.check_tx.is_ok and self.deliver_tx.is_ok
