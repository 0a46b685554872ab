"""
/status — the three focus slots, and the one that wins right now.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ...api.schemas import FocusStatusOut, ResolvedStateOut

router = APIRouter(prefix="/status", tags=["status"])


def _get_focus(request: Request):
    return request.app.state.focus


@router.get("", response_model=FocusStatusOut)
def get_status(focus=Depends(_get_focus)):
    """Return pause, override and schedule; expired slots come back as nulls."""
    return FocusStatusOut(**focus.status().to_dict())


@router.get("/active", response_model=ResolvedStateOut)
def get_active(focus=Depends(_get_focus)):
    """Return the single slot in effect after precedence and expiry."""
    r = focus.active()
    return ResolvedStateOut(state=r.state.value, name=r.name, until=r.until)
