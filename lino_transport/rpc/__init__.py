"""RPC node clients."""
from .tendermint import TendermintClient

__all__ = ["TendermintClient"]
