"""UHF LLRP - Asynchronous LLRP client for Impinj UHF RFID readers."""

from .core import (
    Session,
    SessionOptions,
    InventoryProfile,
    QTScenario,
    LLRPConnection,
    Transactor,
    ConnectionStatus,
    ResultCode,
    UhfLlrpError,
    TransportError,
    ProtocolError,
    CommandError,
    PrerequisiteNotMetError,
)
from .transport import (
    TcpTransport,
    MockTransport,
)
from .protocols.registry import TypeRegistry, get_the_type_registry, enroll_impinj_types

__version__ = '0.1.0'

__all__ = [
    # Core components
    'Session',
    'SessionOptions',
    'InventoryProfile',
    'QTScenario',
    'LLRPConnection',
    'Transactor',
    'ConnectionStatus',
    'ResultCode',
    # Exceptions
    'UhfLlrpError',
    'TransportError',
    'ProtocolError',
    'CommandError',
    'PrerequisiteNotMetError',
    # Transport
    'TcpTransport',
    'MockTransport',
    # Type registry
    'TypeRegistry',
    'get_the_type_registry',
    'enroll_impinj_types',
]
