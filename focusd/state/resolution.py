"""
Resolution Engine — picks the single slot that is active right now.

Precedence is declared as data: the first slot in PRECEDENCE that is still
live wins. An expired slot never blocks a live one below it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .slots import FocusSchedule, FocusStatus, SlotKind


class FocusState(str, Enum):
    PAUSED = "paused"
    OVERRIDDEN = "overridden"
    SCHEDULED = "scheduled"
    IDLE = "idle"


# Highest precedence first
PRECEDENCE: List[Tuple[SlotKind, FocusState]] = [
    (SlotKind.PAUSE, FocusState.PAUSED),
    (SlotKind.OVERRIDE, FocusState.OVERRIDDEN),
    (SlotKind.SCHEDULE, FocusState.SCHEDULED),
]


@dataclass(frozen=True)
class ResolvedState:
    state: FocusState
    name: Optional[str] = None
    until: Optional[int] = None

    @property
    def is_focusing(self) -> bool:
        return self.state in (FocusState.OVERRIDDEN, FocusState.SCHEDULED)


IDLE = ResolvedState(FocusState.IDLE)


class ResolutionEngine:
    """Stateless; safe to share between threads."""

    def resolve(
        self,
        now: int,
        pause: FocusSchedule,
        override: FocusSchedule,
        schedule: FocusSchedule,
    ) -> ResolvedState:
        slots = {
            SlotKind.PAUSE: pause,
            SlotKind.OVERRIDE: override,
            SlotKind.SCHEDULE: schedule,
        }
        for kind, state in PRECEDENCE:
            slot = slots[kind]
            if slot.is_active(now):
                return ResolvedState(state=state, name=slot.name, until=slot.until)
        return IDLE

    def resolve_status(self, now: int, status: FocusStatus) -> ResolvedState:
        return self.resolve(now, status.pause, status.override, status.schedule)
