from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

logger = logging.getLogger(__name__)


def error_payload(
    *,
    error: str,
    type_: str,
    code: str | None = None,
    details: Any | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": error, "code": code, "type": type_}
    if details is not None:
        payload["details"] = details
    return payload


class ChatRelayException(Exception):
    """Base exception for the chat relay.

    Raised at the transport boundary only. The presence core treats missing
    registry entries as no-ops and never raises.
    """

    status_code: int = 400
    default_code: str | None = None

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        self.message = message
        self.code = code if code is not None else self.default_code
        self.status_code = status_code if status_code is not None else self.status_code
        self.details = details
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        return error_payload(
            error=self.message,
            code=self.code,
            type_=self.__class__.__name__,
            details=self.details,
        )


class InvalidPayloadError(ChatRelayException):
    """Raised when an inbound frame does not have the expected shape."""

    status_code = 422
    default_code = "invalid_payload"


class UnknownRoomError(ChatRelayException):
    """Raised when a room is requested that currently has no members."""

    status_code = 404
    default_code = "room_not_found"


def register_exception_handlers(app: FastAPI) -> None:
    """Register the relay's exception handlers on a FastAPI app."""

    @app.exception_handler(ChatRelayException)
    async def _relay_exception_handler(_request: Request, exc: ChatRelayException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        detail = getattr(exc, "detail", None)
        if isinstance(detail, str):
            error = detail
            details = None
        else:
            error = "Request failed"
            details = detail
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(
                error=error,
                code="http_exception",
                type_=exc.__class__.__name__,
                details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload(
                error="Internal server error",
                code="internal_error",
                type_="InternalServerError",
            ),
        )
