"""Core components of the uhf_llrp library."""

from .status import ConnectionStatus, ResultCode, check_llrp_status
from .exceptions import (
    UhfLlrpError,
    TransportError,
    ConnectionError,
    NetworkConnectionError,
    TimeoutError,
    ProtocolError,
    FrameParseError,
    ParameterParseError,
    EncodeError,
    UnexpectedResponseError,
    CommandError,
    MissingStatusError,
    PrerequisiteNotMetError,
    RegistryError,
)
from .connection import LLRPConnection
from .transaction import Transactor
from .monitor import ReportMonitor
from .profiles import SessionOptions, InventoryProfile, QTScenario
from .session import Session, Step

__all__ = [
    'ConnectionStatus',
    'ResultCode',
    'check_llrp_status',
    'UhfLlrpError',
    'TransportError',
    'ConnectionError',
    'NetworkConnectionError',
    'TimeoutError',
    'ProtocolError',
    'FrameParseError',
    'ParameterParseError',
    'EncodeError',
    'UnexpectedResponseError',
    'CommandError',
    'MissingStatusError',
    'PrerequisiteNotMetError',
    'RegistryError',
    'LLRPConnection',
    'Transactor',
    'ReportMonitor',
    'SessionOptions',
    'InventoryProfile',
    'QTScenario',
    'Session',
    'Step',
]
