# uhf_llrp/transport/mock.py

import asyncio
import logging
from typing import Optional, Any, Dict, List, Callable
from collections import deque

from uhf_llrp.transport.base import BaseTransport
from uhf_llrp.core.exceptions import TransportError, ReadError
from uhf_llrp.core.status import ResultCode

logger = logging.getLogger(__name__)

# Receives one sent frame, returns the frames the simulated reader answers with
Responder = Callable[[bytes], List[bytes]]


class MockTransport(BaseTransport):
    """
    A mock transport layer for testing and simulation.

    Simulates connection, disconnection, sending, and receiving data
    without a reader. Responses can be queued up front with add_response()
    or generated per sent frame by a responder.
    """

    def __init__(self, connection_details: Optional[Dict[str, Any]] = None, name: str = "Mock"):
        """
        Initializes the Mock Transport.

        Args:
            connection_details: Not used, kept for interface compatibility.
            name: A name for this mock instance for logging purposes.
        """
        super().__init__(connection_details if connection_details is not None else {})
        self._name = name
        self._response_queue: deque[bytes] = deque()
        self._sent_data_queue: deque[bytes] = deque()
        self._data_available_event = asyncio.Event()
        self._responder: Optional[Responder] = None
        self._connect_error: Optional[Exception] = None
        self._connection_delay = 0.0
        self._receive_delay = 0.0

        logger.debug(f"MockTransport '{self._name}' initialized.")

    async def connect(self) -> None:
        """Simulates establishing a connection."""
        async with self._connection_lock:
            if self._connected:
                logger.warning(f"[{self._name}] Already connected.")
                return

            await asyncio.sleep(self._connection_delay)
            if self._connect_error is not None:
                raise self._connect_error

            self._connected = True
            logger.debug(f"[{self._name}] Mock connection established.")
            await self._start_reader()

    async def disconnect(self) -> None:
        """Simulates closing the connection."""
        async with self._connection_lock:
            if not self._connected and not (self._reader_task and not self._reader_task.done()):
                return
            await self._stop_reader()
            self._connected = False
            logger.debug(f"[{self._name}] Mock connection closed.")

    async def send(self, data: bytes) -> None:
        """Records the sent data and, if a responder is set, queues its answers."""
        if not self.is_connected():
            raise TransportError(f"[{self._name}] Cannot send data: Not connected.", result_code=ResultCode.NOT_CONNECTED)

        logger.debug(f"[{self._name}] Simulating send: {data.hex(' ').upper()}")
        self._sent_data_queue.append(data)
        if self._responder is not None:
            self.add_responses(self._responder(data))

    async def _read_data_loop(self) -> None:
        """Delivers queued responses to the data callback."""
        try:
            while self._connected:
                await self._data_available_event.wait()
                if not self._connected:
                    break

                while self._response_queue:
                    data_to_receive = self._response_queue.popleft()
                    if self._data_received_callback:
                        await asyncio.sleep(self._receive_delay)
                        if not self._connected:
                            break
                        try:
                            await self._data_received_callback(data_to_receive)
                        except Exception as e:
                            logger.exception(f"[{self._name}] Error in data received callback: {e}")
                    else:
                        logger.warning(f"[{self._name}] Data received but no callback registered.")

                self._data_available_event.clear()

        except asyncio.CancelledError:
            raise

    # --- Mock Control Methods ---

    def add_response(self, response_frame: bytes) -> None:
        """Adds a pre-built frame to the incoming data queue."""
        self._response_queue.append(response_frame)
        self._data_available_event.set()

    def add_responses(self, response_frames: List[bytes]) -> None:
        """Adds multiple pre-built frames to the incoming data queue."""
        for frame in response_frames:
            self._response_queue.append(frame)
        if response_frames:
            self._data_available_event.set()

    def set_responder(self, responder: Optional[Responder]) -> None:
        """Installs a callable producing the reader's answer to each sent frame."""
        self._responder = responder

    def set_connect_error(self, error: Optional[Exception]) -> None:
        """Makes the next connect() raise error."""
        self._connect_error = error

    async def close_from_remote(self) -> None:
        """Simulates the reader closing the connection."""
        await self._notify_closed(ReadError("Connection closed by peer.", result_code=ResultCode.RECV_EOF))
        await self.disconnect()

    def get_sent_data(self) -> Optional[bytes]:
        """Retrieves the oldest 'sent' data frame from the queue (FIFO)."""
        try:
            return self._sent_data_queue.popleft()
        except IndexError:
            return None

    def get_all_sent_data(self) -> List[bytes]:
        """Retrieves and clears all 'sent' data frames."""
        data = list(self._sent_data_queue)
        self._sent_data_queue.clear()
        return data

    def clear_response_queue(self) -> None:
        self._response_queue.clear()
        self._data_available_event.clear()

    def set_connection_delay(self, delay: float) -> None:
        self._connection_delay = max(0, delay)

    def set_receive_delay(self, delay: float) -> None:
        self._receive_delay = max(0, delay)
