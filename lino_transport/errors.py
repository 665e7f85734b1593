"""Exception hierarchy for the transport, amount and key layers."""
from __future__ import annotations


class TransportError(Exception):
    """Base exception for node interaction failures."""


class ConfigurationError(TransportError):
    """The transport is missing required configuration (e.g. the node)."""


class QueryTimeoutError(TransportError):
    """The node did not answer a query before the deadline."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class RemoteQueryError(TransportError):
    """The node answered a query with a non-zero application code."""

    def __init__(self, code: int, log: str) -> None:
        super().__init__(f"Query failed: code={code} log={log!r}")
        self.code = code
        self.log = log


class EmptyResultError(TransportError):
    """The node answered a query successfully but with no payload."""


class DecodeError(TransportError):
    """A payload did not match the expected shape."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class NodeError(TransportError):
    """JSON-RPC or HTTP failure reported by the node client."""

    def __init__(self, message: str, code: int | None = None, data: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.data = data


class AmountError(ValueError):
    """Base exception for decimal amount conversion."""


class InvalidFormatError(AmountError):
    """Input is not a plain decimal numeral."""


class AmountOverflowError(AmountError):
    """Amount is above the representable upper bound."""


class AmountUnderflowError(AmountError):
    """Amount is below the smallest representable unit."""


class InvalidPrivateKeyError(ValueError):
    """Private key hex could not be parsed."""
