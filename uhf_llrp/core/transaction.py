# uhf_llrp/core/transaction.py

import logging

from uhf_llrp.core.connection import LLRPConnection, DEFAULT_TRANSACT_TIMEOUT_MS
from uhf_llrp.core.exceptions import UhfLlrpError, TimeoutError, UnexpectedResponseError
from uhf_llrp.protocols.llrp.messages import Message, ErrorMessage
from uhf_llrp.protocols.llrp.xml_dump import to_xml

logger = logging.getLogger(__name__)


def _log_failure(what: str, error: UhfLlrpError) -> None:
    """Logs the reason of a connection failure and the type/field it refers to."""
    reason = getattr(error, "reason", None) or str(error) or "no reason given"
    logger.error(f"{what} failed, {reason}")
    ref_type = getattr(error, 'ref_type', None)
    ref_field = getattr(error, 'ref_field', None)
    if ref_type:
        logger.error(f"... reference type {ref_type}")
    if ref_field:
        logger.error(f"... reference field {ref_field}")


class Transactor:
    """
    Request/response exchange on top of an LLRPConnection.

    Adds the diagnostic XML dumps (verbose >= 2) and uniform failure
    reporting: every failure is logged where it is detected and then
    re-raised to the calling step.
    """

    def __init__(self, connection: LLRPConnection, verbose: int = 0,
                 transact_timeout_ms: int = DEFAULT_TRANSACT_TIMEOUT_MS):
        self._connection = connection
        self.verbose = verbose
        self._transact_timeout_ms = transact_timeout_ms

    @property
    def connection(self) -> LLRPConnection:
        return self._connection

    def _dump(self, title: str, message: Message) -> None:
        if self.verbose >= 2:
            logger.info(f"{title}\n{to_xml(message)}")

    async def transact(self, command: Message) -> Message:
        """
        Sends a command and returns its response.

        Raises:
            TransportError / ProtocolError: The connection failed (logged).
            UnexpectedResponseError: The reader answered with ERROR_MESSAGE.
        """
        self._dump("Transact sending", command)
        try:
            response = await self._connection.transact(command, self._transact_timeout_ms)
        except UhfLlrpError as e:
            _log_failure(f"{command.name} transact", e)
            raise

        self._dump("Transact received response", response)

        if isinstance(response, ErrorMessage):
            logger.error(f"Received ERROR_MESSAGE instead of {command.RESPONSE_NAME}")
            raise UnexpectedResponseError(
                f"Received ERROR_MESSAGE instead of {command.RESPONSE_NAME}",
                expected=command.RESPONSE_NAME,
                received=response,
            )
        return response

    async def send_message(self, command: Message) -> None:
        """Sends a message without waiting for an answer."""
        self._dump("Sending", command)
        try:
            await self._connection.send(command)
        except UhfLlrpError as e:
            _log_failure(f"{command.name} sendMessage", e)
            raise

    async def recv_message(self, max_wait_ms: int) -> Message:
        """
        Returns the next message of any kind.

        Args:
            max_wait_ms: 0 polls, negative blocks forever, positive is a ceiling in ms.

        Raises:
            TimeoutError: Nothing arrived in time. Not logged, callers retry.
        """
        try:
            message = await self._connection.receive(max_wait_ms)
        except TimeoutError:
            raise
        except UhfLlrpError as e:
            _log_failure("recvMessage", e)
            raise

        self._dump("Message received", message)
        return message
