import logging
import re

from .errors import ProtocolError
from .reader import parse_length
from .replies import BulkReply, ErrorReply, IntegerReply, MultiBulkReply, StatusReply, Tag

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(rb"\s*([+-]?\d+)")


def pack_command(*args, encoding="utf-8"):
    """Encode a command as a multi-bulk request."""
    # lengths are in bytes, not characters
    out = [f"*{len(args)}\r\n".encode()]
    for arg in args:
        if isinstance(arg, (bytes, bytearray, memoryview)):
            b_arg = bytes(arg)
        else:
            b_arg = str(arg).encode(encoding)
        out.append(f"${len(b_arg)}\r\n".encode())
        out.append(b_arg + b"\r\n")
    return b"".join(out)


def parse_integer(text, strict=False):
    """Parse an integer reply payload.

    Permissive by default: like C's atoi, leading digits are used and
    anything non-numeric yields 0. With `strict` the whole payload must be
    an integer.
    """
    text = bytes(text)
    if strict:
        try:
            return int(text)
        except ValueError:
            raise ProtocolError(f"invalid integer reply {text!r}") from None
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class ReplyParser:
    """Reads one reply and checks it against the expected reply type."""

    def __init__(self, reader, assembler, strict_integers=False, encoding="utf-8"):
        self.reader = reader
        self.assembler = assembler
        self.strict_integers = strict_integers
        self.encoding = encoding
        self._handlers = {
            Tag.ERROR: self._error,
            Tag.STATUS: self._status,
            Tag.INTEGER: self._integer,
            Tag.BULK: self._bulk,
            Tag.MULTIBULK: self._multibulk,
        }

    def read_reply(self, expected):
        # leftovers from an earlier, failed reply are dropped here
        self.reader.reset()

        line = self.reader.next_line()
        if not line:
            raise ProtocolError("empty reply line")
        prefix = bytes(line[:1])
        payload = bytes(line[1:])

        try:
            tag = Tag(prefix)
        except ValueError:
            raise ProtocolError(f"unknown reply type {prefix!r}") from None
        if tag is not expected and tag is not Tag.ERROR:
            raise ProtocolError(f"expected {expected.name} reply, got {tag.name}")

        return self._handlers[tag](payload)

    def _text(self, payload):
        # undecodable bytes survive and re-encode to the original payload
        return payload.decode(self.encoding, errors="surrogateescape")

    def _error(self, payload):
        return ErrorReply(self._text(payload))

    def _status(self, payload):
        return StatusReply(self._text(payload))

    def _integer(self, payload):
        return IntegerReply(parse_integer(payload, strict=self.strict_integers))

    def _bulk(self, payload):
        length = parse_length(payload)
        if length == -1:
            return BulkReply(None)
        return BulkReply(bytes(self.reader.read_bulk(length)))

    def _multibulk(self, payload):
        count = parse_length(payload)
        if count == -1:
            return MultiBulkReply(None)
        return MultiBulkReply(self.assembler.assemble(count))
