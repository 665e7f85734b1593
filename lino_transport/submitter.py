"""Build, sign and broadcast transactions."""
from __future__ import annotations

import logging
from typing import Any

from .interfaces.codec import Codec
from .interfaces.keys import KeyParser
from .keys import parse_private_key
from .models import CommitResult
from .transport import Transport

logger = logging.getLogger(__name__)


class TransactionSubmitter:
    """Sign a single message with a private key and broadcast it."""

    def __init__(
        self,
        transport: Transport,
        codec: Codec | None = None,
        key_parser: KeyParser = parse_private_key,
    ) -> None:
        self._transport = transport
        self._codec = codec if codec is not None else transport.codec
        self._parse_key = key_parser

    async def submit(
        self, msg: Any, private_key_hex: str, sequence: int, memo: str = ""
    ) -> CommitResult:
        """Sign ``msg`` and broadcast it.

        Key parsing, encoding and signing errors propagate unchanged and are
        raised before anything is sent to the node.
        """
        msgs = [msg]

        priv_key = self._parse_key(private_key_hex)

        sign_bytes = self._codec.encode_sign_bytes(
            msgs, self._transport.chain_id, sequence
        )
        signature = priv_key.sign(sign_bytes)

        tx_bytes = self._codec.encode_tx(
            msgs, priv_key.public_key(), signature, sequence, memo
        )

        logger.debug("Submitting tx with sequence %d", sequence)
        return await self._transport.broadcast_tx(tx_bytes)
