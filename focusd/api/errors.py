"""
Exception handlers — every failure becomes a ``{status: "error", message}``
payload. Malformed requests keep HTTP 200 so clients that only inspect the
``status`` field still see them.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .schemas import ErrorOut

logger = logging.getLogger(__name__)


def describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "malformed request"


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_error(exc)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=200, content=ErrorOut(message=message).model_dump())


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    # ServerErrorMiddleware re-raises after this response, so uvicorn logs the traceback
    return JSONResponse(
        status_code=500,
        content=ErrorOut(message=f"internal error: {exc.__class__.__name__}").model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unexpected_error)
