import socket

import pytest

import kvline as kv
from kvline import client as client_module
from kvline.client import Connection, get_client
from kvline.config import ConnectionConfig
from kvline.errors import (
    ConnectError, EndOfStream, ProtocolError, ReceiveError, RemoteError, SendError, TransportTimeout,
)
from kvline.replies import BulkReply, IntegerReply, MultiBulkReply, StatusReply, Tag


def _recv_request(server):
    server.settimeout(1)
    return server.recv(4096)


def test_ping_pong(conn_pair):
    conn, server = conn_pair
    conn.send_command(b"PING\r\n")
    assert _recv_request(server) == b"PING\r\n"
    server.sendall(b"+PONG\r\n")
    assert conn.receive_reply(Tag.STATUS) == StatusReply("PONG")
    assert conn.reply == StatusReply("PONG")


def test_get_missing_is_null_bulk(conn_pair):
    conn, server = conn_pair
    conn.send_command("GET missing\r\n")
    assert _recv_request(server) == b"GET missing\r\n"
    server.sendall(b"$-1\r\n")
    assert conn.receive_reply(Tag.BULK) == BulkReply(None)


def test_multi_key_query(conn_pair):
    conn, server = conn_pair
    server.sendall(b"*2\r\n$3\r\nfoo\r\n$-1\r\n")
    reply = conn.execute(Tag.MULTIBULK, "MGET", "foo", "bar")
    assert reply == MultiBulkReply([b"foo", None])
    assert len(reply) == 2
    assert _recv_request(server) == b"*3\r\n$4\r\nMGET\r\n$3\r\nfoo\r\n$3\r\nbar\r\n"


def test_error_reply_raises_with_message_intact(conn_pair):
    conn, server = conn_pair
    server.sendall(b"-WRONGTYPE Operation against a key holding the wrong kind of value\r\n")
    with pytest.raises(RemoteError) as excinfo:
        conn.execute(Tag.BULK, "GET", "mylist")
    assert excinfo.value.message == "WRONGTYPE Operation against a key holding the wrong kind of value"
    assert conn.reply.message == excinfo.value.message


def test_reply_slot_is_overwritten(conn_pair):
    conn, server = conn_pair
    server.sendall(b":1\r\n")
    conn.execute(Tag.INTEGER, "INCR", "n")
    server.sendall(b":2\r\n")
    conn.execute(Tag.INTEGER, "INCR", "n")
    assert conn.reply == IntegerReply(2)


def test_protocol_error_keeps_previous_reply(conn_pair):
    conn, server = conn_pair
    server.sendall(b"+OK\r\n")
    conn.execute(Tag.STATUS, "SET", "k", "v")
    server.sendall(b":1\r\n")
    with pytest.raises(ProtocolError):
        conn.execute(Tag.BULK, "GET", "k")
    assert conn.reply == StatusReply("OK")


def test_silent_peer_times_out(conn_pair):
    conn, _ = conn_pair
    with pytest.raises(TransportTimeout):
        conn.execute(Tag.STATUS, "PING")


def test_closed_peer_is_end_of_stream(conn_pair):
    conn, server = conn_pair
    conn.send_command(b"PING\r\n")
    _recv_request(server)
    server.close()
    with pytest.raises(EndOfStream):
        conn.receive_reply(Tag.STATUS)


def test_timeout_and_end_of_stream_are_distinct():
    assert not issubclass(TransportTimeout, EndOfStream)
    assert not issubclass(EndOfStream, TransportTimeout)


def test_large_bulk_reply(conn_pair):
    conn, server = conn_pair
    payload = bytes(range(256)) * 64
    server.sendall(b"$%d\r\n%s\r\n" % (len(payload), payload))
    assert conn.execute(Tag.BULK, "GET", "big").data == payload


def test_close(conn_pair):
    conn, _ = conn_pair
    conn.close()
    assert conn.closed
    conn.close()
    with pytest.raises(SendError):
        conn.send_command(b"PING\r\n")


def test_receive_after_close_is_receive_error(conn_pair):
    conn, _ = conn_pair
    conn.close()
    with pytest.raises(ReceiveError):
        conn.receive_reply(Tag.STATUS)


def test_stalled_send_is_timeout(conn_pair):
    conn, _ = conn_pair
    with pytest.raises(TransportTimeout):
        conn.send_command(b"x" * (8 * 1024 * 1024))


def test_context_manager_closes(socket_pair):
    client, _ = socket_pair
    with Connection(client) as conn:
        assert not conn.closed
    assert conn.closed


def test_connect_over_tcp():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    try:
        conn = Connection.connect(port=port, timeout_ms=500)
        peer, _ = listener.accept()
        try:
            assert conn.peer == ("127.0.0.1", port)
            assert conn.transport.sock.getsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY)
            peer.sendall(b"+PONG\r\n")
            assert kv.Ping(conn=conn) == "PONG"
        finally:
            peer.close()
            conn.close()
    finally:
        listener.close()


def test_connect_refused():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    port = listener.getsockname()[1]
    listener.close()
    with pytest.raises(ConnectError):
        Connection.connect(ConnectionConfig(port=port, timeout_ms=200))


def test_get_client_without_connection(monkeypatch):
    monkeypatch.setattr(client_module, "_global_client", None)
    with pytest.raises(RuntimeError):
        get_client()


def test_get_client_prefers_explicit_connection(conn_pair, monkeypatch):
    conn, _ = conn_pair
    monkeypatch.setattr(client_module, "_global_client", None)
    assert get_client(conn) is conn
