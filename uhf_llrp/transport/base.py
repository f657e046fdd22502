# uhf_llrp/transport/base.py

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Optional, Callable, Coroutine, Any

from uhf_llrp.core.exceptions import TransportError

logger = logging.getLogger(__name__)

# The callback receives raw bytes and must be an async function
AsyncDataCallback = Callable[[bytes], Coroutine[Any, Any, None]]
# Called once when the byte stream ends (peer close or read failure)
AsyncClosedCallback = Callable[[Optional[Exception]], Coroutine[Any, Any, None]]


class BaseTransport(ABC):
    """
    Abstract base class for the byte stream under an LLRP connection.

    Defines the common interface for connecting, disconnecting, sending,
    and receiving data asynchronously. Concrete implementations handle
    the specifics of TCP or Mock communication.
    """

    def __init__(self, connection_details: dict[str, Any]):
        """
        Initializes the transport base.

        Args:
            connection_details: A dictionary containing parameters needed to
                                establish the connection, e.g.
                                {'host': '192.168.1.100', 'port': 5084} for TCP.
        """
        self._connection_details = connection_details
        self._data_received_callback: Optional[AsyncDataCallback] = None
        self._closed_callback: Optional[AsyncClosedCallback] = None
        self._reader_task: Optional[asyncio.Task] = None
        self._connected = False
        self._connection_lock = asyncio.Lock()

    @abstractmethod
    async def connect(self) -> None:
        """
        Establishes the connection to the reader asynchronously.

        Raises:
            ConnectionError: If the connection cannot be established.
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Closes the connection. Safe to call even if not connected."""

    @abstractmethod
    async def send(self, data: bytes) -> None:
        """
        Sends data over the transport layer asynchronously.

        Raises:
            TransportError: If not connected.
            WriteError: If writing fails.
        """
        if not self.is_connected():
            raise TransportError("Cannot send data: Not connected.")

    @abstractmethod
    async def _read_data_loop(self) -> None:
        """
        Internal loop that continuously reads data from the transport
        and calls the registered data callback.
        Started as an asyncio Task by connect().
        """

    def register_data_callback(self, callback: AsyncDataCallback) -> None:
        """
        Registers an async callback to be called when data is received.

        Args:
            callback: An async function that takes bytes as an argument.
        """
        if not inspect.iscoroutinefunction(callback):
            raise TypeError("Callback must be an async function (defined with 'async def')")
        self._data_received_callback = callback
        logger.debug(f"Data callback registered: {callback.__name__}")

    def register_closed_callback(self, callback: AsyncClosedCallback) -> None:
        """Registers an async callback invoked when the stream ends."""
        if not inspect.iscoroutinefunction(callback):
            raise TypeError("Callback must be an async function (defined with 'async def')")
        self._closed_callback = callback

    def unregister_data_callback(self) -> None:
        """Removes the registered data callback."""
        logger.debug(f"Unregistering data callback: {getattr(self._data_received_callback, '__name__', 'None')}")
        self._data_received_callback = None

    def is_connected(self) -> bool:
        """Returns True if the transport layer is currently connected, False otherwise."""
        return self._connected

    async def _notify_closed(self, error: Optional[Exception] = None) -> None:
        if self._closed_callback:
            try:
                await self._closed_callback(error)
            except Exception as e:
                logger.exception(f"Error in closed callback: {e}")

    async def _start_reader(self) -> None:
        """Starts the background reading task."""
        if self._reader_task is None or self._reader_task.done():
            logger.debug("Starting reader task...")
            self._reader_task = asyncio.create_task(self._read_data_loop())
        else:
            logger.debug("Reader task already running.")

    async def _stop_reader(self) -> None:
        """Stops the background reading task gracefully."""
        task = self._reader_task
        if task and not task.done() and task is not asyncio.current_task():
            logger.debug("Stopping reader task...")
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                logger.debug("Reader task cancelled successfully.")
            except Exception as e:
                logger.error(f"Error stopping reader task: {e}")
        self._reader_task = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    @property
    def connection_details(self) -> dict[str, Any]:
        """Returns the connection details provided during initialization."""
        return self._connection_details
