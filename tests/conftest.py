import socket

import pytest

from kvline.client import Connection
from kvline.config import ConnectionConfig
from kvline.errors import TransportTimeout
from kvline.multibulk import MultibulkAssembler
from kvline.protocol import ReplyParser
from kvline.reader import LineBuffer, LineReader


class ChunkedTransport:
    """Plays back canned chunks, one per receive call. An empty chunk means
    the peer closed the connection."""

    def __init__(self, *chunks):
        self.chunks = list(chunks)
        self.calls = 0

    def feed(self, *chunks):
        self.chunks.extend(chunks)

    def receive_into(self, buffer, timeout_ms):
        self.calls += 1
        if not self.chunks:
            raise TransportTimeout("no data")
        chunk = self.chunks.pop(0)
        n = min(len(chunk), len(buffer))
        buffer[:n] = chunk[:n]
        if n < len(chunk):
            self.chunks.insert(0, chunk[n:])
        return n


def split_every(data, size):
    return [data[i:i + size] for i in range(0, len(data), size)]


@pytest.fixture
def make_parser():
    def build(*chunks, capacity=4096, max_capacity=1024 * 1024, strict_integers=False):
        transport = ChunkedTransport(*chunks)
        reader = LineReader(transport, LineBuffer(capacity, max_capacity), 1000)
        parser = ReplyParser(reader, MultibulkAssembler(reader), strict_integers=strict_integers)
        return parser, transport
    return build


@pytest.fixture
def socket_pair():
    client, server = socket.socketpair()
    yield client, server
    client.close()
    server.close()


@pytest.fixture
def conn_pair(socket_pair):
    client, server = socket_pair
    c = Connection(client, ConnectionConfig(timeout_ms=200))
    yield c, server
    c.close()
