"""JSON wire codec for messages, signed transactions and store payloads."""
from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Sequence

from .errors import DecodeError
from .models import KVPair

STD_TX_TYPE = "auth/StdTx"


def _canonical(value: Any) -> bytes:
    """Sorted-key compact JSON, so identical content always signs identically."""
    return json.dumps(value, sort_keys=True, separators=(",", ":")).encode("utf-8")


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _msg_to_json(msg: Any) -> Any:
    to_dict = getattr(msg, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return msg


class JsonCodec:
    """Encode sign documents and transactions as canonical JSON."""

    def encode_sign_bytes(
        self, msgs: Sequence[Any], chain_id: str, sequence: int
    ) -> bytes:
        return _canonical(
            {
                "chain_id": chain_id,
                "msgs": [_msg_to_json(m) for m in msgs],
                "sequence": str(sequence),
            }
        )

    def encode_tx(
        self,
        msgs: Sequence[Any],
        public_key: bytes,
        signature: bytes,
        sequence: int,
        memo: str,
    ) -> bytes:
        return _canonical(
            {
                "type": STD_TX_TYPE,
                "value": {
                    "msg": [_msg_to_json(m) for m in msgs],
                    "signatures": [
                        {
                            "pub_key": _b64(public_key),
                            "signature": _b64(signature),
                            "sequence": str(sequence),
                        }
                    ],
                    "memo": memo,
                },
            }
        )

    def decode(self, data: bytes) -> Any:
        try:
            return json.loads(data)
        except (UnicodeDecodeError, ValueError) as e:
            raise DecodeError(f"Payload is not valid JSON: {e}", cause=e) from e

    def decode_kv_pairs(self, data: bytes) -> list[KVPair]:
        """Decode ``[{"key": b64, "value": b64}, ...]`` preserving order."""
        raw = self.decode(data)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise DecodeError(f"Expected a list of pairs, got {type(raw).__name__}")

        pairs: list[KVPair] = []
        for entry in raw:
            try:
                pairs.append(
                    KVPair(
                        key=base64.b64decode(entry["key"], validate=True),
                        value=base64.b64decode(entry["value"] or "", validate=True),
                    )
                )
            except (KeyError, TypeError, binascii.Error) as e:
                raise DecodeError(f"Malformed key/value pair: {entry!r}", cause=e) from e
        return pairs
