from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple


class Tag(Enum):
    """First byte of a reply line."""

    ERROR = b"-"
    STATUS = b"+"
    INTEGER = b":"
    BULK = b"$"
    MULTIBULK = b"*"


@dataclass(frozen=True)
class ErrorReply:
    tag: ClassVar[Tag] = Tag.ERROR
    message: str


@dataclass(frozen=True)
class StatusReply:
    tag: ClassVar[Tag] = Tag.STATUS
    line: str


@dataclass(frozen=True)
class IntegerReply:
    tag: ClassVar[Tag] = Tag.INTEGER
    value: int


@dataclass(frozen=True)
class BulkReply:
    tag: ClassVar[Tag] = Tag.BULK
    data: Optional[bytes]

    @property
    def is_null(self):
        return self.data is None


@dataclass(frozen=True)
class MultiBulkReply:
    """Ordered bulk entries; `items` is None for a null array.

    Entries are stored as a tuple so the reply stays hashable.
    """

    tag: ClassVar[Tag] = Tag.MULTIBULK
    items: Optional[Tuple[Optional[bytes], ...]]

    def __post_init__(self):
        if self.items is not None:
            object.__setattr__(self, "items", tuple(self.items))

    @property
    def is_null(self):
        return self.items is None

    def __len__(self):
        return 0 if self.items is None else len(self.items)

    def __iter__(self):
        return iter(self.items or ())
