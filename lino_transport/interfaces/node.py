"""Node protocol — blockchain RPC abstraction."""
from typing import Any, Protocol

from ..models import CommitResult, QueryResponse


class Node(Protocol):
    """Abstract interface for a connected RPC node."""

    async def abci_query(
        self, path: str, data: bytes, height: int = 0, trusted: bool = True
    ) -> QueryResponse: ...

    async def broadcast_tx_commit(self, tx: bytes) -> CommitResult: ...

    async def block(self, height: int) -> dict[str, Any]: ...

    async def status(self) -> dict[str, Any]: ...
