"""Runtime configuration for the hostports command line.

Values come from environment variables (``HOSTPORTS_*``); the library API
itself takes everything as arguments and reads no configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_REGISTRY_PATH = "/etc/nerve/nerve.conf.json"


@dataclass
class HostPortsConfig:
    registry_path: Path = Path(DEFAULT_REGISTRY_PATH)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> HostPortsConfig:
        return cls(
            registry_path=Path(os.environ.get("HOSTPORTS_REGISTRY_PATH", DEFAULT_REGISTRY_PATH)),
            log_level=os.environ.get("HOSTPORTS_LOG_LEVEL", "WARNING").upper(),
        )
