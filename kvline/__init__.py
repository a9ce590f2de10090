from .server import Connect, Close, Ping, Auth, Select, Move, DbSize, FlushDb, FlushAll, Save, BgSave, LastSave, Info, SlaveOf
from .strings import Get, Set, GetSet, SetNx, Incr, Decr, IncrBy, DecrBy, MGet
from .keys import KeyType, Del, Exists, Type, Keys, RandomKey, Rename, RenameNx, Expire, Ttl, Sort
from .lists import LPush, RPush, LPop, RPop, LRange, LLen, LIndex, LSet, LRem
from .client import Connection, get_client
from .config import ConnectionConfig
from .protocol import pack_command
from .replies import Tag, ErrorReply, StatusReply, IntegerReply, BulkReply, MultiBulkReply
from .errors import (
    KVLineError, TransportError, ConnectError, SendError, ReceiveError, EndOfStream,
    TransportTimeout, ProtocolError, RemoteError,
)
