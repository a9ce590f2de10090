class KVLineError(Exception):
    """Base class for every error raised by kvline."""


class TransportError(KVLineError):
    """Socket-level failure."""


class ConnectError(TransportError):
    pass


class SendError(TransportError):
    pass


class ReceiveError(TransportError):
    pass


class EndOfStream(ReceiveError):
    """The server closed the connection."""


class TransportTimeout(TransportError):
    """A send or receive did not complete before its deadline."""


class ProtocolError(KVLineError):
    """The reply did not have the expected shape."""


class RemoteError(KVLineError):
    """The server answered with an error reply."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message
