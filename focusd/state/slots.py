"""
Slot model — pause, override and schedule share one tagged record type.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class SlotKind(str, Enum):
    PAUSE = "pause"
    OVERRIDE = "override"
    SCHEDULE = "schedule"


@dataclass(frozen=True)
class FocusSchedule:
    """A slot is active strictly while ``now < until``."""
    kind: SlotKind
    name: Optional[str] = None
    until: Optional[int] = None

    @classmethod
    def empty(cls, kind: SlotKind) -> "FocusSchedule":
        return cls(kind=kind)

    def is_active(self, now: int) -> bool:
        return self.until is not None and now < self.until

    def visible(self, now: int) -> "FocusSchedule":
        """Return this slot, or an empty slot of the same kind once expired."""
        if self.is_active(now):
            return self
        return FocusSchedule.empty(self.kind)

    def to_dict(self) -> dict:
        return {"name": self.name, "until": self.until}


@dataclass(frozen=True)
class FocusStatus:
    pause: FocusSchedule = FocusSchedule(SlotKind.PAUSE)
    override: FocusSchedule = FocusSchedule(SlotKind.OVERRIDE)
    schedule: FocusSchedule = FocusSchedule(SlotKind.SCHEDULE)

    def slot(self, kind: SlotKind) -> FocusSchedule:
        return getattr(self, kind.value)

    def with_slot(self, slot: FocusSchedule) -> "FocusStatus":
        return replace(self, **{slot.kind.value: slot})

    def visible(self, now: int) -> "FocusStatus":
        """Mask every expired slot as absent."""
        return FocusStatus(
            pause=self.pause.visible(now),
            override=self.override.visible(now),
            schedule=self.schedule.visible(now),
        )

    def to_dict(self) -> dict:
        return {
            "pause": self.pause.to_dict(),
            "override": self.override.to_dict(),
            "schedule": self.schedule.to_dict(),
        }
