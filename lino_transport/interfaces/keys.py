"""Key protocol for private key parsing and signing."""
from typing import Callable, Protocol


class PrivateKey(Protocol):
    """Abstract interface for a signing key."""

    def sign(self, data: bytes) -> bytes: ...

    def public_key(self) -> bytes: ...


KeyParser = Callable[[str], PrivateKey]
