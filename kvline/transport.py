import logging
import socket

from .errors import ReceiveError, SendError, TransportTimeout

logger = logging.getLogger(__name__)


class Transport:
    """Deadline-bounded byte I/O over a connected stream socket.

    Knows nothing about the protocol. Every call takes its own deadline in
    milliseconds; the socket timeout is set right before each blocking call.
    """

    def __init__(self, sock):
        self.sock = sock

    def send(self, data, timeout_ms):
        """Send all of `data`, returning the number of bytes actually sent.

        The deadline is re-armed after every partial send, so this only
        stops early when a single attempt makes no progress in time. A
        return value smaller than ``len(data)`` means that happened.
        """
        view = memoryview(data)
        sent = 0
        while sent < len(view):
            try:
                self.sock.settimeout(timeout_ms / 1000)
                sent += self.sock.send(view[sent:])
            except socket.timeout:
                logger.debug(f"Send timed out after {sent} of {len(view)} bytes")
                break
            except OSError as e:
                raise SendError(f"send failed: {e}") from e
        return sent

    def receive_into(self, buffer, timeout_ms):
        """Receive at most ``len(buffer)`` bytes into `buffer`.

        Returns the number of bytes received, which may be fewer than asked
        for, or 0 when the peer closed the connection.
        """
        try:
            self.sock.settimeout(timeout_ms / 1000)
            return self.sock.recv_into(buffer)
        except socket.timeout as e:
            raise TransportTimeout(f"no data within {timeout_ms} ms") from e
        except OSError as e:
            raise ReceiveError(f"receive failed: {e}") from e

    def close(self):
        if self.sock is None:
            return
        try:
            self.sock.close()
        finally:
            self.sock = None
