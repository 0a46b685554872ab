"""
Pydantic schemas for the local focus API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

# ── Status ──────────────────────────────────────────────────────────────────

class FocusScheduleOut(BaseModel):
    # Always serialised, as explicit nulls when the slot is absent
    name: Optional[str] = None
    until: Optional[int] = None


class FocusStatusOut(BaseModel):
    pause: FocusScheduleOut
    override: FocusScheduleOut
    schedule: FocusScheduleOut


class ResolvedStateOut(BaseModel):
    state: str = Field(..., description="paused | overridden | scheduled | idle")
    name: Optional[str] = None
    until: Optional[int] = None


# ── Writes ──────────────────────────────────────────────────────────────────

class PauseRequest(BaseModel):
    until: int = Field(..., description="Unix seconds; past values read as absent")


class OverrideRequest(BaseModel):
    name: str = Field(..., min_length=1)
    until: int = Field(..., description="Unix seconds; past values read as absent")


class AckOut(BaseModel):
    status: Literal["ok"] = "ok"


class OverrideAckOut(AckOut):
    name: str
    until: int


class ErrorOut(BaseModel):
    status: Literal["error"] = "error"
    message: str


# ── Health ──────────────────────────────────────────────────────────────────

class HealthOut(BaseModel):
    status: str
    version: str
    configurations: int
