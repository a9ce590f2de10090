from enum import Enum

from .client import get_client
from .replies import Tag


class KeyType(Enum):
    NONE = "none"
    STRING = "string"
    LIST = "list"
    SET = "set"
    ZSET = "zset"
    HASH = "hash"


def Del(*keys, conn=None):
    """Delete keys, returning how many existed."""
    return get_client(conn).execute(Tag.INTEGER, "DEL", *keys).value


def Exists(key, conn=None):
    """Check if a key exists."""
    return get_client(conn).execute(Tag.INTEGER, "EXISTS", key).value != 0


def Type(key, conn=None):
    """Determine the type stored at key."""
    line = get_client(conn).execute(Tag.STATUS, "TYPE", key).line
    try:
        return KeyType(line)
    except ValueError:
        return KeyType.NONE


def Keys(pattern, conn=None):
    """Find all keys matching the given pattern."""
    return list(get_client(conn).execute(Tag.MULTIBULK, "KEYS", pattern))


def RandomKey(conn=None):
    """Return a random key, or None if the database is empty."""
    return get_client(conn).execute(Tag.BULK, "RANDOMKEY").data


def Rename(key, newkey, conn=None):
    """Rename a key."""
    return get_client(conn).execute(Tag.STATUS, "RENAME", key, newkey).line


def RenameNx(key, newkey, conn=None):
    """Rename a key if the new name is free. False if it was taken."""
    return get_client(conn).execute(Tag.INTEGER, "RENAMENX", key, newkey).value == 1


def Expire(key, seconds, conn=None):
    """Set a key's time to live in seconds. False if the key does not exist."""
    return get_client(conn).execute(Tag.INTEGER, "EXPIRE", key, seconds).value == 1


def Ttl(key, conn=None):
    """Get the time to live for a key in seconds."""
    return get_client(conn).execute(Tag.INTEGER, "TTL", key).value


def Sort(key, *options, conn=None):
    """Sort the elements of a list or set, e.g. Sort("ids", "DESC", "LIMIT", 0, 10)."""
    return list(get_client(conn).execute(Tag.MULTIBULK, "SORT", key, *options))
