# uhf_llrp/core/status.py

import logging
from enum import Enum, auto

from uhf_llrp.core.exceptions import CommandError, MissingStatusError
from uhf_llrp.protocols.llrp import constants as llrp_const

logger = logging.getLogger(__name__)


class ConnectionStatus(Enum):
    """Represents the connection state of the reader."""
    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    DISCONNECTING = auto()
    ERROR = auto()

    def __str__(self):
        return self.name


class ResultCode(Enum):
    """Outcome class attached to connection level errors."""
    OK = auto()
    MISC_ERROR = auto()
    NOT_CONNECTED = auto()
    SEND_IO_ERROR = auto()
    RECV_IO_ERROR = auto()
    RECV_EOF = auto()
    RECV_TIMEOUT = auto()
    FRAME_ERROR = auto()
    DECODE_ERROR = auto()
    ENCODE_ERROR = auto()
    TRANSACT_IN_PROGRESS = auto()

    def __str__(self):
        return self.name


def check_llrp_status(status, what: str) -> None:
    """
    Checks the LLRPStatus parameter of a response.

    Args:
        status: The LLRPStatus parameter of the response, or None when the
                response carried no status at all.
        what: Label of the operation, used in the log line.

    Raises:
        MissingStatusError: If status is None.
        CommandError: If the status code is anything but M_Success.
    """
    if status is None:
        logger.error(f"{what} missing LLRP status")
        raise MissingStatusError(f"{what} missing LLRP status")

    if status.status_code != llrp_const.StatusCode.M_Success:
        if not status.error_description:
            logger.error(f"{what} failed, no error description given")
        else:
            logger.error(f"{what} failed, {status.error_description}")
        raise CommandError(status_code=status.status_code, description=status.error_description or None)
