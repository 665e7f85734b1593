"""Codec protocol for transaction and payload wire encoding."""
from typing import Any, Protocol, Sequence

from ..models import KVPair


class Codec(Protocol):
    """Abstract interface for encoding transactions and decoding payloads."""

    def encode_sign_bytes(
        self, msgs: Sequence[Any], chain_id: str, sequence: int
    ) -> bytes: ...

    def encode_tx(
        self,
        msgs: Sequence[Any],
        public_key: bytes,
        signature: bytes,
        sequence: int,
        memo: str,
    ) -> bytes: ...

    def decode(self, data: bytes) -> Any: ...

    def decode_kv_pairs(self, data: bytes) -> list[KVPair]: ...
