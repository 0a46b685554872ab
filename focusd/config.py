"""
Central configuration for the focus daemon.
Defaults can be overridden by a JSON file (~/.config/focus/daemon.json, or
the path in FOCUS_DAEMON_CONFIG) and then by FOCUS_* environment variables.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from datetime import tzinfo
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "focus"
_CONFIG_FILE = DEFAULT_CONFIG_DIR / "daemon.json"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class Config:
    # API
    api_host: str = "127.0.0.1"
    api_port: int = 9029

    # Schedules
    config_dir: Path = field(default_factory=lambda: DEFAULT_CONFIG_DIR)
    timezone: str = ""                 # IANA name; empty = host local time
    reload_on_change: bool = True      # re-read config_dir when its files change
    reload_interval_s: float = 2.0     # minimum gap between config_dir change checks

    # Logging
    log_level: str = "info"

    def __post_init__(self):
        self.config_dir = Path(self.config_dir).expanduser()

    @property
    def tz(self) -> Optional[tzinfo]:
        return ZoneInfo(self.timezone) if self.timezone else None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        cfg = cls()
        if path is None:
            path = Path(os.environ.get("FOCUS_DAEMON_CONFIG", _CONFIG_FILE)).expanduser()
        if path.exists():
            overrides = json.loads(path.read_text())
            for k, v in overrides.items():
                if hasattr(cfg, k):
                    setattr(cfg, k, _coerce(getattr(cfg, k), v))
        # environment variable overrides (FOCUS_*)
        for f in fields(cfg):
            env_key = f"FOCUS_{f.name.upper()}"
            if env_key in os.environ:
                setattr(cfg, f.name, _coerce(getattr(cfg, f.name), os.environ[env_key]))
        cfg.__post_init__()
        return cfg


def _coerce(current: Any, value: Any) -> Any:
    """Convert *value* to the type of the field's current value."""
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    if isinstance(current, Path):
        return Path(value)
    return type(current)(value)


# Module-level singleton
config = Config.load()
