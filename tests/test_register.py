"""Tests for the StateRegister and the FocusService built on it."""

import threading
from datetime import timezone

import pytest

from focusd.clock import FixedClock
from focusd.schedules.recurrence import RecurringWindow
from focusd.schedules.store import FocusConfiguration, ScheduleStore
from focusd.service import FocusService
from focusd.state.register import StateRegister
from focusd.state.resolution import FocusState
from focusd.state.slots import FocusSchedule, SlotKind


class TestStateRegister:
    def test_starts_empty(self):
        snap = StateRegister().snapshot()
        assert snap.pause.until is None
        assert snap.override.until is None
        assert snap.schedule.until is None

    def test_set_pause_leaves_other_slots(self):
        reg = StateRegister()
        reg.set_override("Work", 2000)
        reg.set_pause(1500)
        snap = reg.snapshot()
        assert snap.pause.until == 1500
        assert snap.pause.name is None
        assert snap.override.name == "Work"
        assert snap.override.until == 2000

    def test_writes_replace_whole_slot(self):
        reg = StateRegister()
        reg.set_override("Work", 2000)
        reg.set_override("Deep Focus", 1200)
        assert reg.snapshot().override == FocusSchedule(SlotKind.OVERRIDE, "Deep Focus", 1200)

    def test_expired_slot_stays_stored_but_reads_absent(self):
        reg = StateRegister()
        reg.set_pause(1060)
        assert reg.snapshot(1061).pause.until is None
        assert reg.snapshot().pause.until == 1060

    def test_clear_returns_previous(self):
        reg = StateRegister()
        reg.set_override("Work", 2000)
        previous = reg.clear(SlotKind.OVERRIDE)
        assert previous.name == "Work"
        assert reg.snapshot().override.until is None

    def test_set_schedule_rejects_other_kinds(self):
        with pytest.raises(ValueError):
            StateRegister().set_schedule(FocusSchedule(SlotKind.PAUSE, until=1))

    def test_concurrent_writers_never_tear_a_slot(self):
        reg = StateRegister()
        pairs = {f"cfg-{i}": 10_000 + i for i in range(8)}
        torn = []

        def writer(name, until):
            for _ in range(500):
                reg.set_override(name, until)

        def reader():
            for _ in range(2000):
                o = reg.snapshot().override
                if o.name is not None and pairs[o.name] != o.until:
                    torn.append(o)

        threads = [threading.Thread(target=writer, args=item) for item in pairs.items()]
        threads.append(threading.Thread(target=reader))
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert torn == []


def _service(clock, windows=()):
    store = ScheduleStore.from_configurations([
        FocusConfiguration("Work", tuple(windows)),
        FocusConfiguration("Deep Focus"),
    ])
    return FocusService(store, clock=clock)


class TestFocusService:
    def test_pause_expires_with_the_clock(self):
        clock = FixedClock(1000)
        svc = _service(clock)
        svc.pause(1060)
        assert svc.status().pause.until == 1060
        assert svc.active().state == FocusState.PAUSED
        clock.set(1061)
        assert svc.status().pause.until is None
        assert svc.active().state == FocusState.IDLE

    def test_unknown_override_name_is_kept_verbatim(self):
        svc = _service(FixedClock(0))
        svc.override("Nonexistent", 600)
        assert svc.status().override.name == "Nonexistent"

    def test_cancel_pause_reveals_override(self):
        svc = _service(FixedClock(0))
        svc.override("Work", 600)
        svc.pause(300)
        assert svc.active().state == FocusState.PAUSED
        svc.cancel(SlotKind.PAUSE)
        assert svc.active().name == "Work"

    def test_schedule_cannot_be_cancelled(self):
        with pytest.raises(ValueError):
            _service(FixedClock(0)).cancel(SlotKind.SCHEDULE)

    def test_schedule_slot_comes_from_store(self):
        store = ScheduleStore.from_configurations(
            [FocusConfiguration("Work", (RecurringWindow.from_dict({"start": "00:00", "end": "01:00"}),))],
            tz=timezone.utc,
        )
        svc = FocusService(store, clock=FixedClock(1000))
        s = svc.status()
        assert s.schedule.name == "Work"
        assert s.schedule.until == 3600
        assert svc.active().state == FocusState.SCHEDULED

    def test_configurations_in_store_order(self):
        assert _service(FixedClock(0)).configurations() == ["Work", "Deep Focus"]
