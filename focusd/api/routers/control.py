"""
/pause and /override — last write wins; DELETE cancels a slot immediately.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ...api.schemas import AckOut, OverrideAckOut, OverrideRequest, PauseRequest
from ...state.slots import SlotKind

router = APIRouter(tags=["control"])


def _get_focus(request: Request):
    return request.app.state.focus


# ── Pause ───────────────────────────────────────────────────────────────────

@router.post("/pause", response_model=AckOut)
def set_pause(req: PauseRequest, focus=Depends(_get_focus)):
    focus.pause(req.until)
    return AckOut()


@router.delete("/pause", response_model=AckOut)
def cancel_pause(focus=Depends(_get_focus)):
    focus.cancel(SlotKind.PAUSE)
    return AckOut()


# ── Override ────────────────────────────────────────────────────────────────

@router.post("/override", response_model=OverrideAckOut)
def set_override(req: OverrideRequest, focus=Depends(_get_focus)):
    slot = focus.override(req.name, req.until)
    return OverrideAckOut(name=slot.name, until=slot.until)


@router.delete("/override", response_model=AckOut)
def cancel_override(focus=Depends(_get_focus)):
    focus.cancel(SlotKind.OVERRIDE)
    return AckOut()
