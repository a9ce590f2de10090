import logging

from .errors import ProtocolError
from .reader import parse_length
from .replies import Tag

logger = logging.getLogger(__name__)


class MultibulkAssembler:
    """Collects the bulk entries of a multi-bulk reply.

    Entries are staged in a scratch list owned by the connection. It grows
    in steps of `chunk` slots and is never shrunk.
    """

    def __init__(self, reader, chunk=64):
        self.reader = reader
        self.chunk = chunk
        self.slots = [None] * chunk

    @property
    def capacity(self):
        return len(self.slots)

    def reserve(self, count):
        if count <= self.capacity:
            return
        size = -(-count // self.chunk) * self.chunk
        self.slots.extend([None] * (size - self.capacity))
        logger.debug(f"Grew multi-bulk scratch array to {size} slots")

    def assemble(self, count):
        """Read `count` bulk replies and return them as a list.

        Null bulks come back as None. Either all entries are read or an
        exception is raised.
        """
        self.reserve(count)
        reader = self.reader
        for i in range(count):
            line = reader.next_line()
            if bytes(line[:1]) != Tag.BULK.value:
                raise ProtocolError(
                    f"multi-bulk entry {i} has tag {bytes(line[:1])!r}, expected {Tag.BULK.value!r}"
                )
            length = parse_length(line[1:])
            if length == -1:
                self.slots[i] = None
            else:
                self.slots[i] = bytes(reader.read_bulk(length))
        items = self.slots[:count]
        for i in range(count):
            self.slots[i] = None
        return items
