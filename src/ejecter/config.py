from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from . import constants

SYSTEM_CONFIG_PATH = Path("/etc/ejecter/config.toml")


def default_config_paths() -> List[Path]:
    """Per-user config first, then the system-wide one."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return [base / "ejecter" / "config.toml", SYSTEM_CONFIG_PATH]


@dataclass
class Config:
    autohide: bool = True
    notification_enabled: bool = True
    notification_timeout_ms: int = -1  # let the notification server decide
    warn_on_unsafe_removal: bool = True
    identifier_kind: str = constants.IDENTIFIER_UNIX_DEVICE
    debug: bool = False

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        if path:
            candidates = [Path(path)]
        else:
            candidates = default_config_paths()
        cfg_path = next((p for p in candidates if p.exists()), None)
        if cfg_path is None:
            return cls(debug=bool(os.environ.get("DEBUG_EJ")))
        with cfg_path.open("rb") as f:
            parsed = tomllib.load(f)

        return cls(
            autohide=parsed.get("autohide", True),
            notification_enabled=parsed.get("notification_enabled", True),
            notification_timeout_ms=parsed.get("notification_timeout_ms", -1),
            warn_on_unsafe_removal=parsed.get("warn_on_unsafe_removal", True),
            identifier_kind=parsed.get("identifier_kind", constants.IDENTIFIER_UNIX_DEVICE),
            debug=parsed.get("debug", False) or bool(os.environ.get("DEBUG_EJ")),
        )
