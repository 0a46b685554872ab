"""
/configurations — names of the recurring schedules found on disk.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request

router = APIRouter(prefix="/configurations", tags=["configurations"])


def _get_focus(request: Request):
    return request.app.state.focus


@router.get("", response_model=List[str])
def list_configurations(focus=Depends(_get_focus)):
    return focus.configurations()
