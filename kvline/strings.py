from .client import get_client
from .replies import Tag


def Get(key, conn=None):
    """Retrieve the value of a key, or None if it does not exist."""
    return get_client(conn).execute(Tag.BULK, "GET", key).data


def Set(key, value, conn=None):
    """Set the string value of a key."""
    return get_client(conn).execute(Tag.STATUS, "SET", key, value).line


def GetSet(key, value, conn=None):
    """Set a new value and return the old one."""
    return get_client(conn).execute(Tag.BULK, "GETSET", key, value).data


def SetNx(key, value, conn=None):
    """Set a key only if it does not exist. False if it already existed."""
    return get_client(conn).execute(Tag.INTEGER, "SETNX", key, value).value == 1


def Incr(key, conn=None):
    """Increment the integer value of a key by one."""
    return get_client(conn).execute(Tag.INTEGER, "INCR", key).value


def Decr(key, conn=None):
    """Decrement the integer value of a key by one."""
    return get_client(conn).execute(Tag.INTEGER, "DECR", key).value


def IncrBy(key, increment, conn=None):
    """Increment the integer value of a key by the given amount."""
    return get_client(conn).execute(Tag.INTEGER, "INCRBY", key, increment).value


def DecrBy(key, decrement, conn=None):
    """Decrement the integer value of a key by the given amount."""
    return get_client(conn).execute(Tag.INTEGER, "DECRBY", key, decrement).value


def MGet(*keys, conn=None):
    """Get the values of all the given keys."""
    reply = get_client(conn).execute(Tag.MULTIBULK, "MGET", *keys)
    return None if reply.is_null else list(reply)
