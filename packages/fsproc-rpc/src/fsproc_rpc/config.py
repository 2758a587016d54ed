"""Host configuration and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class HostConfig:
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> HostConfig:
        """Read FSPROC_HOST, FSPROC_PORT and FSPROC_LOG_LEVEL, falling back to defaults."""
        defaults = cls()
        port = os.environ.get("FSPROC_PORT")
        try:
            port_num = int(port) if port else defaults.port
        except ValueError:
            raise ValueError(f"FSPROC_PORT must be an integer, got '{port}'")
        return cls(
            host=os.environ.get("FSPROC_HOST", defaults.host),
            port=port_num,
            log_level=os.environ.get("FSPROC_LOG_LEVEL", defaults.log_level).upper(),
        )


def configure_logging(level: str | int = "WARNING") -> None:
    """Configure root logging once for the CLI and server."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger("fsproc").setLevel(level)
    logging.getLogger("fsproc_rpc").setLevel(level)
