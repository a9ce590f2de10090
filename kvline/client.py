from dataclasses import replace
import logging
import socket

from .config import ConnectionConfig
from .errors import ConnectError, ProtocolError, ReceiveError, RemoteError, SendError, TransportTimeout
from .multibulk import MultibulkAssembler
from .protocol import ReplyParser, pack_command
from .reader import LineBuffer, LineReader
from .replies import ErrorReply
from .transport import Transport

logger = logging.getLogger(__name__)


class Connection:
    """One connection to the store: socket, receive buffer and last reply.

    Runs a single request/reply cycle at a time. Share it between threads
    only behind a lock held for the whole cycle.
    """

    def __init__(self, sock, config=None):
        self.config = config or ConnectionConfig()
        self.transport = Transport(sock)
        try:
            self.peer = sock.getpeername()
        except OSError:
            self.peer = None
        self.buffer = LineBuffer(self.config.buffer_size, self.config.max_buffer_size)
        self.reader = LineReader(self.transport, self.buffer, self.config.timeout_ms)
        self.assembler = MultibulkAssembler(self.reader, self.config.multibulk_chunk)
        self.parser = ReplyParser(
            self.reader,
            self.assembler,
            strict_integers=self.config.strict_integers,
            encoding=self.config.encoding,
        )
        self.reply = None

    @classmethod
    def connect(cls, config=None, **overrides):
        """Open a TCP connection to ``config.host:config.port``."""
        if config is None:
            config = ConnectionConfig(**overrides)
        elif overrides:
            config = replace(config, **overrides)
        try:
            sock = socket.create_connection((config.host, config.port), timeout=config.timeout)
        except OSError as e:
            raise ConnectError(f"cannot connect to {config.host}:{config.port}: {e}") from e
        try:
            if config.keepalive:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
            if config.nodelay:
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError as e:
            sock.close()
            raise ConnectError(f"cannot configure socket: {e}") from e
        conn = cls(sock, config)
        logger.debug(f"Connected to {conn.peer}")
        return conn

    @property
    def closed(self):
        return self.transport.sock is None

    def send_command(self, request):
        """Send an already formatted request, e.g. ``b"PING\\r\\n"``."""
        if self.closed:
            raise SendError("connection is closed")
        if isinstance(request, str):
            request = request.encode(self.config.encoding)
        sent = self.transport.send(request, self.config.timeout_ms)
        if sent < len(request):
            raise TransportTimeout(
                f"sent {sent} of {len(request)} bytes within {self.config.timeout_ms} ms"
            )
        logger.debug(f"Sent {sent} bytes")

    def receive_reply(self, expected):
        """Read one reply of type `expected` and keep it in ``self.reply``.

        An error reply is stored too, then raised as RemoteError.
        """
        if self.closed:
            raise ReceiveError("connection is closed")
        try:
            reply = self.parser.read_reply(expected)
        except ProtocolError as e:
            logger.warning(f"Protocol error from {self.peer}: {e}")
            raise
        self.reply = reply
        if isinstance(reply, ErrorReply):
            raise RemoteError(reply.message)
        return reply

    def execute(self, expected, *args):
        """Pack `args` as a command, send it and read the reply."""
        self.send_command(pack_command(*args, encoding=self.config.encoding))
        return self.receive_reply(expected)

    def close(self):
        if self.closed:
            return
        self.transport.close()
        self.buffer.reset()
        self.reply = None
        logger.debug(f"Closed connection to {self.peer}")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


_global_client = None


def get_client(conn=None):
    if conn is not None:
        return conn
    if _global_client is None:
        raise RuntimeError("Client not connected. Call Connect() first.")
    return _global_client
