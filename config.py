"""Configuration constants and TOML loader for the static file server."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_PATH: str = "nebula.toml"
BUFFER_SIZE: int = 1024
SOCKET_TIMEOUT_SECS: int = 30
LISTEN_BACKLOG: int = 128
ACCEPT_POLL_SECS: float = 0.2
LOG_LEVEL: str = "INFO"

DEFAULT_ADDRESS: str = "127.0.0.1"
DEFAULT_PORT: int = 7878
DEFAULT_PUBLIC_DIR: str = "public"
DEFAULT_FILE: str = "index.html"


class ConfigError(ValueError):
    """Raised when a configuration document is structurally invalid."""


@dataclass(frozen=True, slots=True)
class ServerConfig:
    address: str
    port: int
    public_dir: str
    default_file: str


DEFAULT_CONFIG = ServerConfig(
    address=DEFAULT_ADDRESS,
    port=DEFAULT_PORT,
    public_dir=DEFAULT_PUBLIC_DIR,
    default_file=DEFAULT_FILE,
)


def _require_table(document: dict[str, Any], name: str) -> dict[str, Any]:
    table = document.get(name)
    if not isinstance(table, dict):
        raise ConfigError(f"missing [{name}] table")
    return table


def _require_string(table: dict[str, Any], section: str, key: str) -> str:
    value = table.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{section}.{key} must be a non-empty string")
    return value


def parse_config(text: str) -> ServerConfig:
    """Build a ServerConfig from TOML text, raising on any missing or invalid field."""
    document = tomllib.loads(text)
    server = _require_table(document, "server")
    content = _require_table(document, "content")

    port = server.get("port")
    # bool is an int subclass; TOML `true` is not a port.
    if isinstance(port, bool) or not isinstance(port, int):
        raise ConfigError("server.port must be an integer")
    if not 0 <= port <= 65535:
        raise ConfigError(f"server.port out of range: {port}")

    return ServerConfig(
        address=_require_string(server, "server", "address"),
        port=port,
        public_dir=_require_string(content, "content", "public_dir"),
        default_file=_require_string(content, "content", "default_file"),
    )


def load_config(path: str | Path = CONFIG_PATH) -> ServerConfig:
    """Load configuration from ``path``; any failure yields DEFAULT_CONFIG.

    There is no merging: either the whole file is valid or the whole
    default is used.
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read %s: %s. Using default config.", config_path, exc)
        return DEFAULT_CONFIG

    try:
        return parse_config(text)
    except (tomllib.TOMLDecodeError, ConfigError) as exc:
        logger.warning("Error parsing %s: %s. Using default config.", config_path, exc)
        return DEFAULT_CONFIG
