"""
FastAPI application — local focus scheduling API.
Runs on http://127.0.0.1:9029 by default.

The FocusService lives on app.state so that each call to create_app()
produces a fully independent daemon with no shared module-level state.
This makes test isolation straightforward.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..config import Config, config as default_config
from ..schedules.store import ScheduleStore
from ..service import FocusService
from .errors import register_error_handlers
from .schemas import HealthOut

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(
    cfg: Optional[Config] = None,
    clock=None,
    store: Optional[ScheduleStore] = None,
) -> FastAPI:
    cfg = cfg or default_config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        schedules = store or ScheduleStore(
            cfg.config_dir,
            tz=cfg.tz,
            reload_on_change=cfg.reload_on_change,
            check_interval_s=cfg.reload_interval_s,
        )
        app.state.focus = FocusService(schedules, clock=clock)
        logger.info("Focus daemon ready on %s:%d", cfg.api_host, cfg.api_port)

        yield

        logger.info("Focus daemon stopping")

    app = FastAPI(
        title="Focus Daemon",
        description="Local focus schedule, override and pause API",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost", "http://127.0.0.1", "null"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    from .routers import configurations, control, status

    app.include_router(status.router)
    app.include_router(control.router)
    app.include_router(configurations.router)

    @app.get("/health", response_model=HealthOut)
    def health(request: Request):
        focus = getattr(request.app.state, "focus", None)
        count = len(focus.configurations()) if focus is not None else 0
        return HealthOut(status="ok", version=VERSION, configurations=count)

    return app


app = create_app()
