from .client import Connection, get_client
from . import client as client_module
from .replies import Tag


def Connect(host='127.0.0.1', port=6379, timeout_ms=2000, **options):
    """Initializes the default connection to the store."""
    c = Connection.connect(host=host, port=port, timeout_ms=timeout_ms, **options)
    if client_module._global_client is not None:
        client_module._global_client.close()
    client_module._global_client = c
    return c


def Close():
    """Closes the default connection."""
    c = get_client()
    c.close()
    client_module._global_client = None


def Ping(conn=None):
    """Ping the server."""
    return get_client(conn).execute(Tag.STATUS, "PING").line


def Auth(password, conn=None):
    """Authenticate to the server."""
    return get_client(conn).execute(Tag.STATUS, "AUTH", password).line


def Select(index, conn=None):
    """Change the selected database for the current connection."""
    return get_client(conn).execute(Tag.STATUS, "SELECT", index).line


def Move(key, index, conn=None):
    """Move a key to another database. False if it was not moved."""
    return get_client(conn).execute(Tag.INTEGER, "MOVE", key, index).value == 1


def DbSize(conn=None):
    """Return the number of keys in the database."""
    return get_client(conn).execute(Tag.INTEGER, "DBSIZE").value


def FlushDb(conn=None):
    """Remove all keys from the current database."""
    return get_client(conn).execute(Tag.STATUS, "FLUSHDB").line


def FlushAll(conn=None):
    """Remove all keys from all databases."""
    return get_client(conn).execute(Tag.STATUS, "FLUSHALL").line


def Save(conn=None):
    """Synchronously save the database to disk."""
    return get_client(conn).execute(Tag.STATUS, "SAVE").line


def BgSave(conn=None):
    """Asynchronously save the database to disk."""
    return get_client(conn).execute(Tag.STATUS, "BGSAVE").line


def LastSave(conn=None):
    """Unix time of the last successful save."""
    return get_client(conn).execute(Tag.INTEGER, "LASTSAVE").value


def Info(conn=None):
    """Get server information and statistics."""
    return get_client(conn).execute(Tag.BULK, "INFO").data


def SlaveOf(host=None, port=None, conn=None):
    """Replicate another server, or stop replicating when no host is given."""
    if host is None or not port:
        return get_client(conn).execute(Tag.STATUS, "SLAVEOF", "NO", "ONE").line
    return get_client(conn).execute(Tag.STATUS, "SLAVEOF", host, port).line
