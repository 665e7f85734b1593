"""
secp256k1 key handling for transaction signing.

Private keys are supplied as hex (32 bytes, optional 0x prefix). Signatures
cover the SHA-256 digest of the sign bytes and are returned as the 64-byte
``r || s`` form with low-S normalisation, as Tendermint nodes expect.

Dependencies: eth-keys (pure-python secp256k1 backend)
"""

from __future__ import annotations

import hashlib

from eth_keys import keys
from eth_keys.exceptions import ValidationError

from .errors import InvalidPrivateKeyError

# Order of the secp256k1 group.
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_HALF_N = SECP256K1_N // 2


class Secp256k1PrivateKey:
    """Signing key wrapping an eth-keys private key."""

    def __init__(self, key: keys.PrivateKey) -> None:
        self._key = key

    def sign(self, data: bytes) -> bytes:
        """Sign ``sha256(data)`` and return ``r || s`` (64 bytes)."""
        digest = hashlib.sha256(data).digest()
        signature = self._key.sign_msg_hash(digest)
        s = signature.s
        if s > _HALF_N:
            s = SECP256K1_N - s
        return signature.r.to_bytes(32, "big") + s.to_bytes(32, "big")

    def public_key(self) -> bytes:
        """Return the 33-byte compressed public key."""
        return self._key.public_key.to_compressed_bytes()

    def __repr__(self) -> str:
        # Never leak key material into logs.
        return f"Secp256k1PrivateKey(pub={self.public_key().hex()})"


def parse_private_key(private_key_hex: str) -> Secp256k1PrivateKey:
    """
    Parse a hex-encoded secp256k1 private key.

    Args:
        private_key_hex: 64 hex characters, optionally 0x-prefixed

    Returns:
        Secp256k1PrivateKey

    Raises:
        InvalidPrivateKeyError: If the hex is malformed or out of range
    """
    if not isinstance(private_key_hex, str):
        raise InvalidPrivateKeyError("Private key must be a hex string")

    hex_str = private_key_hex.strip()
    if hex_str.startswith(("0x", "0X")):
        hex_str = hex_str[2:]

    try:
        raw = bytes.fromhex(hex_str)
    except ValueError as e:
        raise InvalidPrivateKeyError(f"Private key is not valid hex: {e}") from e

    if len(raw) != 32:
        raise InvalidPrivateKeyError(
            f"Private key must be 32 bytes, got {len(raw)}"
        )

    secret = int.from_bytes(raw, "big")
    if not 0 < secret < SECP256K1_N:
        raise InvalidPrivateKeyError("Private key is out of the secp256k1 range")

    try:
        return Secp256k1PrivateKey(keys.PrivateKey(raw))
    except ValidationError as e:
        raise InvalidPrivateKeyError(f"Invalid private key: {e}") from e
