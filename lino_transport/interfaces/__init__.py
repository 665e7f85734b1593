"""Protocol interfaces for the node transport."""
from .codec import Codec
from .keys import KeyParser, PrivateKey
from .node import Node

__all__ = ["Codec", "KeyParser", "Node", "PrivateKey"]
