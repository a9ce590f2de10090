import logging
import re

from .errors import EndOfStream, ProtocolError

logger = logging.getLogger(__name__)

CRLF = b"\r\n"
_LENGTH = re.compile(rb"-?\d+")


class LineBuffer:
    """Reusable receive buffer with a read cursor.

    Bytes in ``[idx, len)`` are received but not yet consumed, bytes before
    ``idx`` are consumed and get overwritten by the next fill.
    """

    def __init__(self, capacity=4096, max_capacity=None):
        self.data = bytearray(capacity)
        self.max_capacity = max_capacity or capacity
        self.idx = 0
        self.len = 0

    @property
    def capacity(self):
        return len(self.data)

    @property
    def empty(self):
        return self.idx >= self.len

    def reset(self):
        self.idx = 0
        self.len = 0

    def compact(self):
        """Move the unconsumed bytes to the front of the buffer."""
        if self.idx == 0:
            return
        pending = self.len - self.idx
        self.data[:pending] = self.data[self.idx:self.len]
        self.idx = 0
        self.len = pending

    def grow(self, needed):
        if needed > self.max_capacity:
            raise ProtocolError(
                f"reply frame of {needed} bytes exceeds buffer limit of {self.max_capacity}"
            )
        size = self.capacity
        while size < needed:
            size *= 2
        size = min(size, self.max_capacity)
        # bytearray cannot resize in place while line views are exported
        data = bytearray(size)
        data[:self.len] = self.data[:self.len]
        self.data = data
        logger.debug(f"Grew receive buffer to {size} bytes")


class LineReader:
    def __init__(self, transport, buffer, timeout_ms):
        self.transport = transport
        self.buffer = buffer
        self.timeout_ms = timeout_ms

    def reset(self):
        """Forget everything buffered; the next line starts a fresh fill."""
        self.buffer.reset()

    def next_line(self, skip=0):
        """Return a view of the next CRLF-terminated line, without the CRLF.

        The search for the delimiter starts `skip` bytes past the cursor so
        that a payload of known length may itself contain CR or LF. The view
        points into the buffer and is only good until the next read.
        """
        buf = self.buffer
        if buf.empty:
            buf.reset()
            self._fill()

        while True:
            start = buf.idx + skip
            if start + 2 <= buf.len:
                pos = buf.data.find(CRLF, start, buf.len)
                if pos != -1:
                    line = memoryview(buf.data)[buf.idx:pos]
                    buf.idx = pos + 2
                    return line
            self._read_more(skip + 2)

    def read_bulk(self, length):
        """Consume exactly `length` payload bytes and their trailing CRLF."""
        line = self.next_line(length)
        if len(line) != length:
            raise ProtocolError(f"bulk payload is {len(line)} bytes, expected {length}")
        return line

    def _read_more(self, needed):
        buf = self.buffer
        buf.compact()
        if buf.len == buf.capacity or needed > buf.capacity:
            buf.grow(max(needed, buf.len + 1))
        self._fill()

    def _fill(self):
        buf = self.buffer
        with memoryview(buf.data) as view:
            received = self.transport.receive_into(view[buf.len:], self.timeout_ms)
        if received == 0:
            raise EndOfStream("connection closed by server")
        buf.len += received


def parse_length(text):
    """Parse a bulk length or multi-bulk count; -1 stands for null."""
    text = bytes(text)
    if not _LENGTH.fullmatch(text):
        raise ProtocolError(f"invalid length {text!r}")
    value = int(text)
    if value < -1:
        raise ProtocolError(f"negative length {value}")
    return value
