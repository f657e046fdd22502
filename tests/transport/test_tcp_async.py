# tests/transport/test_tcp_async.py

import asyncio

import pytest
import pytest_asyncio

from uhf_llrp.core.exceptions import TransportError, NetworkConnectionError, ReadError
from uhf_llrp.core.status import ResultCode
from uhf_llrp.transport.tcp_async import TcpTransport


class EchoReader:
    """Local TCP server standing in for a reader: echoes every chunk back."""

    def __init__(self):
        self.server = None
        self.writers = []

    async def start(self) -> int:
        self.server = await asyncio.start_server(self._serve, host='127.0.0.1', port=0)
        return self.server.sockets[0].getsockname()[1]

    async def _serve(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        self.writers.append(writer)
        try:
            while True:
                data = await reader.read(1024)
                if not data:
                    break
                writer.write(data)
                await writer.drain()
        except (ConnectionError, asyncio.CancelledError):
            pass

    async def drop_clients(self):
        for writer in self.writers:
            writer.close()

    async def stop(self):
        await self.drop_clients()
        self.server.close()
        await self.server.wait_closed()


@pytest_asyncio.fixture
async def echo_reader():
    server = EchoReader()
    await server.start()
    yield server
    await server.stop()


def test_requires_host():
    with pytest.raises(ValueError):
        TcpTransport({'port': 5084})


def test_default_port():
    transport = TcpTransport({'host': 'reader'})
    assert transport.host == 'reader'
    assert transport.port == 5084


@pytest.mark.asyncio
async def test_send_and_receive(echo_reader: EchoReader):
    port = echo_reader.server.sockets[0].getsockname()[1]
    received = asyncio.Queue()

    async def on_data(data: bytes):
        await received.put(data)

    transport = TcpTransport({'host': '127.0.0.1', 'port': port})
    transport.register_data_callback(on_data)
    async with transport:
        assert transport.is_connected()
        await transport.send(b'\x04\x3c\x00\x00\x00\x0a\x00\x00\x00\x01')
        data = await asyncio.wait_for(received.get(), timeout=2.0)
        assert data == b'\x04\x3c\x00\x00\x00\x0a\x00\x00\x00\x01'

    assert not transport.is_connected()


@pytest.mark.asyncio
async def test_peer_close_is_reported(echo_reader: EchoReader):
    port = echo_reader.server.sockets[0].getsockname()[1]
    closed = asyncio.Queue()

    async def on_data(data: bytes):
        pass

    async def on_closed(error):
        await closed.put(error)

    transport = TcpTransport({'host': '127.0.0.1', 'port': port})
    transport.register_data_callback(on_data)
    transport.register_closed_callback(on_closed)
    await transport.connect()
    # let the server register the client before dropping it
    while not echo_reader.writers:
        await asyncio.sleep(0.01)

    await echo_reader.drop_clients()
    error = await asyncio.wait_for(closed.get(), timeout=2.0)

    assert isinstance(error, ReadError)
    assert error.result_code == ResultCode.RECV_EOF
    await transport.disconnect()


@pytest.mark.asyncio
async def test_connection_refused():
    server = await asyncio.start_server(lambda r, w: None, host='127.0.0.1', port=0)
    port = server.sockets[0].getsockname()[1]
    server.close()
    await server.wait_closed()

    transport = TcpTransport({'host': '127.0.0.1', 'port': port, 'connect_timeout': 2.0})
    with pytest.raises(NetworkConnectionError):
        await transport.connect()
    assert not transport.is_connected()


@pytest.mark.asyncio
async def test_send_not_connected():
    transport = TcpTransport({'host': '127.0.0.1'})
    with pytest.raises(TransportError) as exc_info:
        await transport.send(b'\x00')
    assert exc_info.value.result_code == ResultCode.NOT_CONNECTED


def test_callbacks_must_be_async():
    transport = TcpTransport({'host': '127.0.0.1'})
    with pytest.raises(TypeError):
        transport.register_data_callback(lambda data: None)
    with pytest.raises(TypeError):
        transport.register_closed_callback(lambda error: None)
