"""Transport implementations for the uhf_llrp library."""

from .base import BaseTransport
from .tcp_async import TcpTransport
from .mock import MockTransport

__all__ = [
    'BaseTransport',
    'TcpTransport',
    'MockTransport',
]
