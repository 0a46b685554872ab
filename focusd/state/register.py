"""
State Register — the daemon's single in-memory record of the three slots.

Every write replaces a whole slot under one coarse lock, so a reader never
sees half of a ``{name, until}`` pair or a mix of old and new slots.
Expired slots are left in place; the read path masks them.
"""

from __future__ import annotations

import threading
from typing import Optional

from .slots import FocusSchedule, FocusStatus, SlotKind


class StateRegister:

    def __init__(self):
        self._lock = threading.Lock()
        self._status = FocusStatus()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set_pause(self, until: int) -> FocusSchedule:
        # pause is anonymous
        return self._put(FocusSchedule(SlotKind.PAUSE, name=None, until=until))

    def set_override(self, name: str, until: int) -> FocusSchedule:
        return self._put(FocusSchedule(SlotKind.OVERRIDE, name=name, until=until))

    def set_schedule(self, slot: FocusSchedule) -> FocusSchedule:
        if slot.kind is not SlotKind.SCHEDULE:
            raise ValueError(f"expected a schedule slot, got {slot.kind.value}")
        return self._put(slot)

    def clear(self, kind: SlotKind) -> FocusSchedule:
        """Reset *kind* to absent and return what was there before."""
        with self._lock:
            previous = self._status.slot(kind)
            self._status = self._status.with_slot(FocusSchedule.empty(kind))
        return previous

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self, now: Optional[int] = None) -> FocusStatus:
        """
        Return all three slots as one consistent value. When *now* is
        given, expired slots come back as absent.
        """
        with self._lock:
            status = self._status
        if now is None:
            return status
        return status.visible(now)

    def _put(self, slot: FocusSchedule) -> FocusSchedule:
        with self._lock:
            self._status = self._status.with_slot(slot)
        return slot
