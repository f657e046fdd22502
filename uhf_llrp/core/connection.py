# uhf_llrp/core/connection.py

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Callable, Any, Dict, Tuple, Union

from uhf_llrp.transport.base import BaseTransport
from uhf_llrp.transport.tcp_async import TcpTransport
from uhf_llrp.protocols import framing
from uhf_llrp.protocols.registry import TypeRegistry
from uhf_llrp.protocols.llrp import constants as llrp_const
from uhf_llrp.protocols.llrp.messages import Message, ErrorMessage
from uhf_llrp.core.exceptions import (
    UhfLlrpError, TransportError, ConnectionError, EncodeError,
    FrameParseError, ParameterParseError, TimeoutError,
)
from uhf_llrp.core.status import ConnectionStatus, ResultCode

TransportFactory = Callable[[Dict[str, Any]], BaseTransport]

DEFAULT_TRANSACT_TIMEOUT_MS = 5000

logger = logging.getLogger(__name__)


def parse_address(address: str) -> Tuple[str, int]:
    """
    Splits 'host' or 'host:port' (IPv6 as '[addr]:port').

    Raises:
        ValueError: If the port is not a valid number.
    """
    address = address.strip()
    if address.startswith('['):
        host, _, rest = address[1:].partition(']')
        port_text = rest[1:] if rest.startswith(':') else ''
    elif address.count(':') == 1:
        host, port_text = address.split(':')
    else:
        host, port_text = address, ''
    if not host:
        raise ValueError(f"No host in address '{address}'")
    port = int(port_text) if port_text else llrp_const.DEFAULT_LLRP_PORT
    if not (0 < port <= 0xFFFF):
        raise ValueError(f"Port {port} out of range")
    return host, port


@dataclass
class _PendingTransaction:
    message_id: int
    response_type: tuple
    future: asyncio.Future


class LLRPConnection:
    """
    One LLRP connection to one reader.

    Reassembles messages from the transport byte stream, decodes them with
    the type registry and routes them: the response to the outstanding
    transaction resolves it, everything else is queued for receive().
    """

    def __init__(self, registry: TypeRegistry, max_frame_size: int = llrp_const.DEFAULT_MAX_FRAME_SIZE,
                 transport_factory: Optional[TransportFactory] = None):
        """
        Args:
            registry: Type registry used to decode inbound messages.
            max_frame_size: Largest inbound or outbound message accepted, in bytes.
            transport_factory: Builds the transport from connection details.
                               Defaults to TcpTransport.
        """
        if not isinstance(registry, TypeRegistry):
            raise TypeError("registry must be an instance of TypeRegistry")
        if max_frame_size < llrp_const.MESSAGE_HEADER_LENGTH:
            raise ValueError(f"max_frame_size {max_frame_size} is smaller than a message header")

        self._registry = registry
        self._max_frame_size = max_frame_size
        self._transport_factory: TransportFactory = transport_factory or TcpTransport
        self._transport: Optional[BaseTransport] = None
        self._status = ConnectionStatus.DISCONNECTED

        self._rx_buffer = bytearray()
        self._inbound: asyncio.Queue[Union[Message, UhfLlrpError]] = asyncio.Queue()
        self._pending: Optional[_PendingTransaction] = None

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def transport(self) -> Optional[BaseTransport]:
        return self._transport

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def is_connected(self) -> bool:
        return self._transport is not None and self._transport.is_connected()

    # --- Lifecycle ---

    async def open(self, address: str) -> None:
        """
        Connects to the reader at 'host' or 'host:port'.

        Raises:
            ConnectionError: If the address is invalid or the connection fails.
        """
        if self._transport is not None:
            raise ConnectionError("Connection is already open.", result_code=ResultCode.MISC_ERROR)

        try:
            host, port = parse_address(address)
        except ValueError as e:
            raise ConnectionError(f"Invalid reader address '{address}': {e}", result_code=ResultCode.MISC_ERROR) from e

        self._status = ConnectionStatus.CONNECTING
        transport = self._transport_factory({'host': host, 'port': port})
        transport.register_data_callback(self._data_received_handler)
        transport.register_closed_callback(self._stream_closed_handler)
        try:
            await transport.connect()
        except TransportError:
            self._status = ConnectionStatus.ERROR
            raise

        self._rx_buffer.clear()
        self._transport = transport
        self._status = ConnectionStatus.CONNECTED
        logger.debug(f"LLRP connection open to {host}:{port}")

    async def close(self) -> None:
        """Closes the connection. Calling it again is a no-op."""
        transport = self._transport
        if transport is None:
            return
        self._status = ConnectionStatus.DISCONNECTING
        self._transport = None
        if self._pending and not self._pending.future.done():
            self._pending.future.cancel("Connection closed")
        try:
            await transport.disconnect()
        finally:
            transport.unregister_data_callback()
            self._status = ConnectionStatus.DISCONNECTED

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # --- Messaging ---

    async def send(self, message: Message) -> None:
        """
        Encodes and sends one message without waiting for an answer.

        Raises:
            TransportError: If not connected (NOT_CONNECTED) or the write fails.
            EncodeError: If the message cannot be encoded.
        """
        if not self.is_connected():
            raise TransportError(f"Cannot send {message.name}: not connected.", result_code=ResultCode.NOT_CONNECTED)
        try:
            frame = message.encode()
        except EncodeError as e:
            e.result_code = ResultCode.ENCODE_ERROR
            raise
        if len(frame) > self._max_frame_size:
            error = EncodeError(f"{message.name} is {len(frame)} bytes, larger than max frame size {self._max_frame_size}",
                                ref_type=message.name)
            error.result_code = ResultCode.ENCODE_ERROR
            raise error
        logger.debug(f"Sending {message.name} (id={message.message_id}, {len(frame)} bytes)")
        await self._transport.send(frame)

    async def receive(self, max_wait_ms: int) -> Message:
        """
        Returns the next inbound message that is not a transaction response.

        Args:
            max_wait_ms: 0 polls, a negative value waits forever, a positive
                         value is the maximum wait in milliseconds.

        Raises:
            TimeoutError: If nothing arrives in time (RECV_TIMEOUT).
            UhfLlrpError: A queued decode or stream error.
        """
        if self._inbound.empty() and not self.is_connected():
            raise TransportError("Cannot receive: not connected.", result_code=ResultCode.NOT_CONNECTED)
        try:
            if max_wait_ms == 0:
                item = self._inbound.get_nowait()
            elif max_wait_ms < 0:
                item = await self._inbound.get()
            else:
                item = await asyncio.wait_for(self._inbound.get(), timeout=max_wait_ms / 1000.0)
        except (asyncio.QueueEmpty, asyncio.TimeoutError):
            raise TimeoutError(f"No message received within {max_wait_ms} ms", result_code=ResultCode.RECV_TIMEOUT) from None

        if isinstance(item, UhfLlrpError):
            raise item
        return item

    async def transact(self, message: Message, timeout_ms: int = DEFAULT_TRANSACT_TIMEOUT_MS) -> Message:
        """
        Sends a request and waits for its response.

        The response is the inbound message with the same message ID whose
        type is the request's response type, or an ERROR_MESSAGE.

        Raises:
            TransportError: TRANSACT_IN_PROGRESS if another transaction is pending,
                            or send failures.
            TimeoutError: If no response arrives within timeout_ms.
            EncodeError: If the request has no response type or cannot be encoded.
        """
        if self._pending is not None:
            raise TransportError("Another transaction is in progress.", result_code=ResultCode.TRANSACT_IN_PROGRESS)
        if message.RESPONSE_TYPE is None:
            raise EncodeError(f"{message.name} is not a request with a response", ref_type=message.name)

        future = asyncio.get_running_loop().create_future()
        self._pending = _PendingTransaction(message.message_id, message.RESPONSE_TYPE, future)
        try:
            await self.send(message)
            return await asyncio.wait_for(future, timeout=timeout_ms / 1000.0)
        except asyncio.TimeoutError:
            raise TimeoutError(f"No {message.RESPONSE_NAME} received within {timeout_ms} ms",
                               result_code=ResultCode.RECV_TIMEOUT) from None
        finally:
            self._pending = None

    # --- Inbound Path ---

    async def _data_received_handler(self, data: bytes) -> None:
        """Async callback called by the transport layer when data arrives."""
        self._rx_buffer.extend(data)
        while True:
            try:
                parsed = framing.find_and_parse_message(self._rx_buffer, self._max_frame_size)
            except FrameParseError as e:
                e.result_code = ResultCode.FRAME_ERROR
                self._deliver_error(e)
                break
            if parsed is None:
                break

            message_type, message_id, payload = parsed
            try:
                message = self._registry.decode_message(message_type, message_id, payload)
            except ParameterParseError as e:
                logger.error(f"Error decoding message type {message_type} (id={message_id}): {e}")
                e.result_code = ResultCode.DECODE_ERROR
                self._deliver_error(e, message_id)
                continue

            logger.debug(f"Received {message.name} (id={message_id})")
            self._route(message)

    def _route(self, message: Message) -> None:
        pending = self._pending
        if (pending is not None and not pending.future.done()
                and message.message_id == pending.message_id
                and (message.key == pending.response_type or isinstance(message, ErrorMessage))):
            pending.future.set_result(message)
        else:
            self._inbound.put_nowait(message)

    def _deliver_error(self, error: UhfLlrpError, message_id: Optional[int] = None) -> None:
        pending = self._pending
        if (pending is not None and not pending.future.done()
                and (message_id is None or message_id == pending.message_id)):
            pending.future.set_exception(error)
        else:
            self._inbound.put_nowait(error)

    async def _stream_closed_handler(self, error: Optional[Exception]) -> None:
        logger.warning(f"Reader connection lost: {error}")
        self._status = ConnectionStatus.ERROR
        if not isinstance(error, UhfLlrpError):
            error = TransportError("Connection lost.", original_exception=error, result_code=ResultCode.RECV_EOF)
        self._deliver_error(error)
