"""
Schedule Store — named recurring focus configurations loaded from disk.

One YAML file per configuration in the configuration directory:

    name: Deep Focus            # optional, defaults to the file stem
    schedule:
      - days: [mon, tue, wed, thu, fri]
        start: "09:00"
        end: "12:30"

Files are read in file-name order, which is also the order of list_names().
A file that cannot be parsed is logged and skipped; a missing directory is
simply an empty store.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from ..state.slots import FocusSchedule, SlotKind
from .recurrence import RecurringWindow, ScheduleConfigError

logger = logging.getLogger(__name__)

CONFIG_SUFFIXES = (".yaml", ".yml")

_Signature = Tuple[Tuple[str, int, int], ...]


@dataclass(frozen=True)
class FocusConfiguration:
    name: str
    windows: Tuple[RecurringWindow, ...] = ()
    source: Optional[Path] = None

    @classmethod
    def from_dict(cls, raw: dict, default_name: str, source: Optional[Path] = None) -> "FocusConfiguration":
        name = raw.get("name", default_name)
        if not isinstance(name, str) or not name.strip():
            raise ScheduleConfigError(f"invalid configuration name: {name!r}")
        windows = raw.get("schedule") or []
        if not isinstance(windows, list):
            raise ScheduleConfigError("'schedule' must be a list of windows")
        return cls(
            name=name.strip(),
            windows=tuple(RecurringWindow.from_dict(w) for w in windows),
            source=source,
        )

    def active_until(self, moment: datetime) -> Optional[datetime]:
        """Latest end among this configuration's windows that contain *moment*."""
        ends = [e for e in (w.active_until(moment) for w in self.windows) if e is not None]
        return max(ends) if ends else None


@dataclass
class _Loaded:
    configurations: List[FocusConfiguration] = field(default_factory=list)
    signature: _Signature = ()


class ScheduleStore:
    """
    Read-mostly collection of FocusConfigurations keyed by unique name.

    Usage:
        store = ScheduleStore(Path("~/.config/focus").expanduser())
        store.list_names()                    # ["Deep Focus", "Work"]
        store.resolve_active_recurring(now)   # FocusSchedule(kind=schedule, ...)
    """

    def __init__(
        self,
        config_dir: Optional[Path],
        tz: Optional[tzinfo] = None,
        reload_on_change: bool = True,
        check_interval_s: float = 0.0,
    ):
        self.config_dir = Path(config_dir).expanduser() if config_dir else None
        self.tz = tz
        self.reload_on_change = reload_on_change
        self.check_interval_s = check_interval_s
        self._next_check = 0.0
        self._lock = threading.Lock()
        self._loaded = _Loaded()
        self.reload()

    @classmethod
    def from_configurations(
        cls, configurations: List[FocusConfiguration], tz: Optional[tzinfo] = None
    ) -> "ScheduleStore":
        """Build an in-memory store with no backing directory."""
        store = cls(None, tz=tz, reload_on_change=False)
        store._loaded = _Loaded(configurations=_dedupe(configurations))
        return store

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def reload(self) -> int:
        """Re-read the configuration directory; returns the number loaded."""
        signature = self._signature()
        configurations = _dedupe(self._read_all())
        with self._lock:
            self._loaded = _Loaded(configurations=configurations, signature=signature)
        logger.info(
            "Loaded %d focus configuration(s) from %s",
            len(configurations), self.config_dir,
        )
        return len(configurations)

    def refresh(self) -> bool:
        """
        Reload if the directory changed since the last load. The directory is
        stat-ed at most once per check_interval_s.
        """
        if not self.reload_on_change or self.config_dir is None:
            return False
        now = time.monotonic()
        with self._lock:
            if now < self._next_check:
                return False
            self._next_check = now + self.check_interval_s
            current = self._loaded.signature
        if self._signature() == current:
            return False
        self.reload()
        return True

    def _config_files(self) -> List[Path]:
        if self.config_dir is None:
            return []
        try:
            return sorted(
                p for p in self.config_dir.iterdir()
                if p.is_file() and p.suffix.lower() in CONFIG_SUFFIXES
            )
        except OSError:
            return []

    def _signature(self) -> _Signature:
        entries = []
        for path in self._config_files():
            try:
                st = path.stat()
            except OSError:
                continue
            entries.append((path.name, st.st_mtime_ns, st.st_size))
        return tuple(entries)

    def _read_all(self) -> List[FocusConfiguration]:
        if self.config_dir is not None and not self.config_dir.is_dir():
            logger.warning("Configuration directory %s not found, no schedules loaded", self.config_dir)
            return []
        configurations = []
        for path in self._config_files():
            try:
                configurations.append(_read_file(path))
            except (OSError, UnicodeDecodeError, yaml.YAMLError, ScheduleConfigError) as e:
                logger.warning("Skipping configuration %s: %s", path.name, e)
        return configurations

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def configurations(self) -> List[FocusConfiguration]:
        self.refresh()
        with self._lock:
            return list(self._loaded.configurations)

    def list_names(self) -> List[str]:
        return [c.name for c in self.configurations()]

    def get(self, name: str) -> Optional[FocusConfiguration]:
        for c in self.configurations():
            if c.name == name:
                return c
        return None

    def resolve_active_recurring(self, now: int) -> FocusSchedule:
        """
        The first configuration (in store order) with a window containing
        *now*, as a schedule slot ending when that window ends.
        """
        moment = datetime.fromtimestamp(now, tz=self.tz)
        for c in self.configurations():
            ends = c.active_until(moment)
            if ends is not None:
                return FocusSchedule(SlotKind.SCHEDULE, name=c.name, until=int(ends.timestamp()))
        return FocusSchedule.empty(SlotKind.SCHEDULE)


def _read_file(path: Path) -> FocusConfiguration:
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ScheduleConfigError("top level must be a mapping")
    return FocusConfiguration.from_dict(raw, default_name=path.stem, source=path)


def _dedupe(configurations: List[FocusConfiguration]) -> List[FocusConfiguration]:
    seen = set()
    unique = []
    for c in configurations:
        if c.name in seen:
            logger.warning(
                "Duplicate configuration name %r in %s, keeping the first",
                c.name, c.source.name if c.source else "<memory>",
            )
            continue
        seen.add(c.name)
        unique.append(c)
    return unique
