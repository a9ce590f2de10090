from .client import get_client
from .replies import Tag


def LPush(key, *values, conn=None):
    """Prepend one or multiple values to a list."""
    return get_client(conn).execute(Tag.INTEGER, "LPUSH", key, *values).value


def RPush(key, *values, conn=None):
    """Append one or multiple values to a list."""
    return get_client(conn).execute(Tag.INTEGER, "RPUSH", key, *values).value


def LPop(key, conn=None):
    """Remove and get the first element in a list."""
    return get_client(conn).execute(Tag.BULK, "LPOP", key).data


def RPop(key, conn=None):
    """Remove and get the last element in a list."""
    return get_client(conn).execute(Tag.BULK, "RPOP", key).data


def LRange(key, start, stop, conn=None):
    """Get a range of elements from a list."""
    return list(get_client(conn).execute(Tag.MULTIBULK, "LRANGE", key, start, stop))


def LLen(key, conn=None):
    """Get the length of a list."""
    return get_client(conn).execute(Tag.INTEGER, "LLEN", key).value


def LIndex(key, index, conn=None):
    """Get an element from a list by its index."""
    return get_client(conn).execute(Tag.BULK, "LINDEX", key, index).data


def LSet(key, index, value, conn=None):
    """Set the value of an element in a list by its index."""
    return get_client(conn).execute(Tag.STATUS, "LSET", key, index, value).line


def LRem(key, count, value, conn=None):
    """Remove elements equal to value, returning how many were removed."""
    return get_client(conn).execute(Tag.INTEGER, "LREM", key, count, value).value
