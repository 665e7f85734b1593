"""Client-side transport for querying and broadcasting to a blockchain node."""
from .amount import DECIMALS, Amount, parse_from_decimal, to_decimal
from .errors import (
    ConfigurationError,
    DecodeError,
    EmptyResultError,
    QueryTimeoutError,
    RemoteQueryError,
    TransportError,
)
from .submitter import TransactionSubmitter
from .transport import Transport

__all__ = [
    "DECIMALS",
    "Amount",
    "ConfigurationError",
    "DecodeError",
    "EmptyResultError",
    "QueryTimeoutError",
    "RemoteQueryError",
    "TransactionSubmitter",
    "Transport",
    "TransportError",
    "parse_from_decimal",
    "to_decimal",
]
