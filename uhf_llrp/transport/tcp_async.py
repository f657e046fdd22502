# uhf_llrp/transport/tcp_async.py

import asyncio
import logging
from typing import Optional, Any, Dict

from uhf_llrp.transport.base import BaseTransport
from uhf_llrp.core.exceptions import TransportError, ConnectionError, NetworkConnectionError, ReadError, WriteError
from uhf_llrp.core.status import ResultCode
from uhf_llrp.protocols.llrp.constants import DEFAULT_LLRP_PORT

logger = logging.getLogger(__name__)

DEFAULT_TCP_BUFFER_SIZE = 4096  # Bytes to read at a time
DEFAULT_CONNECT_TIMEOUT = 10.0  # Seconds


class TcpTransport(BaseTransport):
    """
    Asynchronous TCP transport for LLRP, using asyncio streams.
    """

    def __init__(self, connection_details: Dict[str, Any]):
        """
        Initializes the TCP Transport.

        Args:
            connection_details: Dictionary containing TCP connection settings.
                Required: 'host' (string, IP address or hostname)
                Optional: 'port' (integer, default 5084),
                          'buffer_size' (integer),
                          'connect_timeout' (seconds)
        """
        super().__init__(connection_details)

        if 'host' not in self._connection_details:
            raise ValueError("Missing 'host' in connection_details for TcpTransport.")

        self._host = str(self._connection_details['host'])
        self._port = int(self._connection_details.get('port', DEFAULT_LLRP_PORT))

        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None
        self._read_buffer_size = self._connection_details.get('buffer_size', DEFAULT_TCP_BUFFER_SIZE)
        self._connect_timeout = self._connection_details.get('connect_timeout', DEFAULT_CONNECT_TIMEOUT)

        logger.debug(f"TcpTransport initialized for {self._host}:{self._port}")

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    def _reset_streams(self) -> None:
        self._connected = False
        self._reader = None
        self._writer = None

    async def connect(self) -> None:
        """Establishes the asynchronous TCP connection."""
        async with self._connection_lock:
            if self._connected:
                logger.warning(f"TCP connection to {self.host}:{self.port} already established.")
                return

            logger.debug(f"Connecting to TCP endpoint {self.host}:{self.port}...")
            try:
                self._reader, self._writer = await asyncio.wait_for(
                    asyncio.open_connection(host=self.host, port=self.port),
                    timeout=self._connect_timeout,
                )
                self._connected = True
                peername = self._writer.get_extra_info('peername', ('Unknown', 'Unknown'))
                logger.debug(f"TCP connection to {self.host}:{self.port} established (peer: {peername}).")

                await self._start_reader()

            except ConnectionRefusedError as e:
                self._reset_streams()
                raise NetworkConnectionError(host=self.host, port=self.port, message="Connection refused.", original_exception=e) from e
            except asyncio.TimeoutError as e:
                self._reset_streams()
                raise NetworkConnectionError(host=self.host, port=self.port, message="Connection attempt timed out.", original_exception=e) from e
            except OSError as e:  # host unreachable, DNS failure, ...
                self._reset_streams()
                raise NetworkConnectionError(host=self.host, port=self.port, message=f"OS error: {e}", original_exception=e) from e
            except Exception as e:
                logger.exception(f"Unexpected error connecting to {self.host}:{self.port}: {e}")
                self._reset_streams()
                raise ConnectionError(f"Unexpected error connecting to {self.host}:{self.port}: {e}", original_exception=e) from e

    async def disconnect(self) -> None:
        """Closes the asynchronous TCP connection."""
        async with self._connection_lock:
            if not self._connected and not (self._reader_task and not self._reader_task.done()):
                return

            logger.debug(f"Disconnecting from TCP endpoint {self.host}:{self.port}...")

            await self._stop_reader()

            writer = self._writer
            if writer:
                self._writer = None
                self._reader = None
                if not writer.is_closing():
                    try:
                        writer.close()
                        await writer.wait_closed()
                    except Exception as e:
                        logger.error(f"Error closing TCP writer for {self.host}:{self.port}: {e}")

            self._connected = False
            logger.debug(f"TCP connection to {self.host}:{self.port} disconnected.")

    async def send(self, data: bytes) -> None:
        """Sends data over the TCP connection asynchronously."""
        if not self.is_connected() or not self._writer:
            raise TransportError(
                f"Cannot send data: TCP connection to {self.host}:{self.port} not established.",
                result_code=ResultCode.NOT_CONNECTED,
            )

        logger.debug(f"TCP sending ({len(data)} bytes) to {self.host}:{self.port}: {data.hex(' ').upper()}")
        try:
            self._writer.write(data)
            await self._writer.drain()
        except (ConnectionResetError, BrokenPipeError) as e:
            logger.error(f"Connection error while writing to {self.host}:{self.port}: {e}")
            if self._connected:
                asyncio.create_task(self._handle_stream_error(e))
            raise WriteError(f"Connection error during send to {self.host}:{self.port}", original_exception=e,
                             result_code=ResultCode.SEND_IO_ERROR) from e
        except OSError as e:
            logger.error(f"OS error while writing to {self.host}:{self.port}: {e}")
            if self._connected:
                asyncio.create_task(self._handle_stream_error(e))
            raise WriteError(f"OS error during send to {self.host}:{self.port}", original_exception=e,
                             result_code=ResultCode.SEND_IO_ERROR) from e

    async def _read_data_loop(self) -> None:
        """Background task to continuously read data from the TCP connection."""
        peer = f"{self.host}:{self.port}"
        logger.debug(f"TCP reader loop started for {peer}.")
        try:
            while self._connected and self._reader:
                data = await self._reader.read(self._read_buffer_size)

                if data:
                    logger.debug(f"TCP received ({len(data)} bytes) from {peer}: {data.hex(' ').upper()}")
                    if self._data_received_callback:
                        try:
                            await self._data_received_callback(data)
                        except Exception as e:
                            logger.exception(f"Error in TCP data received callback: {e}")
                    else:
                        logger.warning(f"TCP data received from {peer} but no callback registered.")
                else:
                    # read() returning empty bytes means EOF
                    logger.warning(f"TCP connection closed by peer {peer}.")
                    await self._notify_closed(ReadError("Connection closed by peer.", result_code=ResultCode.RECV_EOF))
                    if self._connected:
                        asyncio.create_task(self.disconnect())
                    break

        except asyncio.CancelledError:
            logger.debug(f"TCP reader loop for {peer} cancelled.")
            raise
        except OSError as e:
            logger.error(f"OS error while reading from {peer}: {e}")
            await self._notify_closed(ReadError(f"Read from {peer} failed.", original_exception=e,
                                                result_code=ResultCode.RECV_IO_ERROR))
            if self._connected:
                asyncio.create_task(self._handle_stream_error(e))
        finally:
            logger.debug(f"TCP reader loop for {peer} stopped.")

    async def _handle_stream_error(self, error: Exception):
        """Tears the connection down after a read or write failure."""
        logger.error(f"Handling stream error on {self.host}:{self.port}: {error}")
        if self._connected:
            await self.disconnect()
