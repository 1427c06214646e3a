import logging
import os
from dataclasses import dataclass, field

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 8000


def default_static_dir():
    return os.path.join(os.getcwd(), 'static')


class ConfigError(ValueError):
    pass


@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    static_dir: str = field(default_factory=default_static_dir)
    index_file: str = 'index.html'
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ=None):
        """Build a config from HOST, PORT, STATIC_DIR, INDEX_FILE and LOG_LEVEL."""
        environ = os.environ if environ is None else environ

        raw_port = environ.get('PORT', str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError as e:
            raise ConfigError(f"Failed to parse PORT variable: {raw_port!r}") from e
        if not 0 < port < 65536:
            raise ConfigError(f"Failed to parse PORT variable: {port} is out of range")

        log_level = environ.get('LOG_LEVEL', 'INFO').upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"Unknown LOG_LEVEL: {log_level!r}")

        return cls(
            host=environ.get('HOST', DEFAULT_HOST),
            port=port,
            static_dir=environ.get('STATIC_DIR') or default_static_dir(),
            index_file=environ.get('INDEX_FILE', 'index.html'),
            log_level=log_level,
        )
