from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from ...engine.errors import (
    BoardFileError,
    EngineError,
    GameOverError,
    NoRestorePoint,
    NotationError,
    PhaseError,
    QuotaExceeded,
)


logger = logging.getLogger(__name__)


def error_envelope(
    *,
    code: str,
    message: str,
    err_type: str,
    request_id: str,
    field_errors: Optional[list[dict[str, str]]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
            "type": err_type,
            "request_id": request_id,
        }
    }
    if field_errors:
        payload["error"]["field_errors"] = field_errors
    return payload


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, HTTPException):
        return await exception_handler(request, exc)
    status_code = exc.status_code
    payload = error_envelope(
        code=_status_to_code(status_code),
        message=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        err_type="client_error" if 400 <= status_code < 500 else "server_error",
        request_id=_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=payload)


async def engine_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a rejected action as a 400 (409 once the game is over)."""
    if not isinstance(exc, EngineError):
        return await exception_handler(request, exc)
    status_code = status.HTTP_409_CONFLICT if isinstance(exc, GameOverError) else status.HTTP_400_BAD_REQUEST
    payload = error_envelope(
        code=_engine_code(exc),
        message=str(exc),
        err_type="client_error",
        request_id=_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=payload)


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _request_id(request)
    logger.exception("Unhandled exception", extra={"request_id": request_id})
    payload = error_envelope(
        code="internal_error",
        message="Internal Server Error",
        err_type="server_error",
        request_id=request_id,
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


async def request_validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = []
    if isinstance(exc, RequestValidationError):
        for e in exc.errors():
            loc = ".".join(str(p) for p in e.get("loc", []) if p is not None)
            errors.append(
                {
                    "field": loc,
                    "code": e.get("type", "value_error"),
                    "message": e.get("msg", "invalid value"),
                }
            )
    payload = error_envelope(
        code="unprocessable_entity",
        message="Validation error",
        err_type="client_error",
        request_id=_request_id(request),
        field_errors=errors or None,
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=payload)


def _engine_code(exc: EngineError) -> str:
    if isinstance(exc, GameOverError):
        return "game_over"
    if isinstance(exc, QuotaExceeded):
        return "quota_exceeded"
    if isinstance(exc, PhaseError):
        return "phase_error"
    if isinstance(exc, BoardFileError):
        return "invalid_file"
    if isinstance(exc, NotationError):
        return "parse_error"
    if isinstance(exc, NoRestorePoint):
        return "no_restore_point"
    return "illegal_move"


def _status_to_code(status_code: int) -> str:
    if status_code == status.HTTP_404_NOT_FOUND:
        return "not_found"
    if status_code == status.HTTP_400_BAD_REQUEST:
        return "bad_request"
    if status_code == status.HTTP_409_CONFLICT:
        return "conflict"
    if status_code == status.HTTP_422_UNPROCESSABLE_ENTITY:
        return "unprocessable_entity"
    if 500 <= status_code < 600:
        return "internal_error"
    return "error"
