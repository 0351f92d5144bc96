"""Map store errors onto the ``{"ok": false, "error": ...}`` envelope."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import InvalidInput, StorageError

logger = logging.getLogger(__name__)


def _error(
    status_code: int, message: str, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": message},
        headers=headers,
    )


async def _invalid_input(request: Request, exc: InvalidInput) -> JSONResponse:
    logger.info("rejected %s %s: %s", request.method, request.url.path, exc)
    return _error(400, str(exc))


async def _malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("malformed request to %s: %s", request.url.path, exc.errors())
    return _error(400, "invalid_json")


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Bodies that are not valid UTF-8 or hold oversized numbers fail here.
    if exc.status_code == 400:
        logger.info("unparseable body for %s: %s", request.url.path, exc.detail)
        return _error(400, "invalid_json", exc.headers)
    return _error(exc.status_code, str(exc.detail), exc.headers)


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    # Details are already logged where the error was raised.
    return _error(500, "server_error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on the given app."""

    app.add_exception_handler(InvalidInput, _invalid_input)
    app.add_exception_handler(RequestValidationError, _malformed_request)
    app.add_exception_handler(StorageError, _storage_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)


__all__ = ["register_exception_handlers"]
