"""
Focus Service — the daemon's explicitly owned state.

Ties the StateRegister, ScheduleStore and ResolutionEngine to one clock.
A single instance lives on ``app.state.focus``; tests build their own with
a FixedClock and never touch HTTP.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .clock import SystemClock
from .schedules.store import ScheduleStore
from .state.register import StateRegister
from .state.resolution import ResolutionEngine, ResolvedState
from .state.slots import FocusSchedule, FocusStatus, SlotKind

logger = logging.getLogger(__name__)


class FocusService:

    def __init__(
        self,
        store: ScheduleStore,
        clock=None,
        register: Optional[StateRegister] = None,
        engine: Optional[ResolutionEngine] = None,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.register = register or StateRegister()
        self.engine = engine or ResolutionEngine()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def status(self) -> FocusStatus:
        """All three slots as of now, expired ones reported absent."""
        now = self.clock.now()
        self.register.set_schedule(self.store.resolve_active_recurring(now))
        return self.register.snapshot(now)

    def active(self) -> ResolvedState:
        now = self.clock.now()
        self.register.set_schedule(self.store.resolve_active_recurring(now))
        return self.engine.resolve_status(now, self.register.snapshot(now))

    def configurations(self) -> List[str]:
        return self.store.list_names()

    # ------------------------------------------------------------------
    # Mutations (each replaces one slot wholesale)
    # ------------------------------------------------------------------

    def pause(self, until: int) -> FocusSchedule:
        slot = self.register.set_pause(until)
        self._log_write(slot)
        return slot

    def override(self, name: str, until: int) -> FocusSchedule:
        slot = self.register.set_override(name, until)
        if self.store.get(name) is None:
            logger.info("Override %r does not match a known configuration", name)
        self._log_write(slot)
        return slot

    def cancel(self, kind: SlotKind) -> FocusSchedule:
        if kind is SlotKind.SCHEDULE:
            raise ValueError("the recurring schedule cannot be cancelled")
        previous = self.register.clear(kind)
        logger.info("Cancelled %s (was %s)", kind.value, previous.to_dict())
        return previous

    def _log_write(self, slot: FocusSchedule) -> None:
        now = self.clock.now()
        if slot.is_active(now):
            logger.info(
                "Set %s%s for %ds",
                slot.kind.value,
                f" {slot.name!r}" if slot.name else "",
                slot.until - now,
            )
        else:
            logger.info("Set %s with past until=%s; it reads as absent", slot.kind.value, slot.until)
