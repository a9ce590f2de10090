"""Connection settings for kvline"""

from dataclasses import dataclass
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 6379


@dataclass
class ConnectionConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout_ms: int = 2000
    buffer_size: int = 4096
    max_buffer_size: int = 512 * 1024 * 1024
    multibulk_chunk: int = 64
    # non-numeric integer replies parse as 0 unless this is set
    strict_integers: bool = False
    keepalive: bool = True
    nodelay: bool = True
    encoding: str = "utf-8"

    def __post_init__(self):
        for name in ("timeout_ms", "buffer_size", "max_buffer_size", "multibulk_chunk"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if not 0 < self.port < 65536:
            raise ValueError(f"invalid port {self.port}")
        if self.max_buffer_size < self.buffer_size:
            raise ValueError("max_buffer_size is smaller than buffer_size")

    @property
    def timeout(self):
        return self.timeout_ms / 1000

    @classmethod
    def from_env(cls, environ=None, **overrides):
        """Build a config from KVLINE_HOST, KVLINE_PORT and KVLINE_TIMEOUT_MS."""
        environ = os.environ if environ is None else environ
        values = {}
        if environ.get("KVLINE_HOST"):
            values["host"] = environ["KVLINE_HOST"]
        for key, name in (("KVLINE_PORT", "port"), ("KVLINE_TIMEOUT_MS", "timeout_ms")):
            raw = environ.get(key)
            if not raw:
                continue
            try:
                values[name] = int(raw)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {raw!r}") from None
        values.update(overrides)
        config = cls(**values)
        logger.debug(f"Loaded connection config for {config.host}:{config.port}")
        return config
