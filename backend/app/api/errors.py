from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.clock import iso_timestamp
from ..observability.logging import get_logger
from ..schemas.response import ErrorResponse, NotFoundResponse

logger = get_logger("api.errors")

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Unmatched routes fall through here.

    A known path hit with the wrong method is treated as not found too.
    """
    if exc.status_code in (404, 405):
        body = NotFoundResponse(path=request.url.path, timestamp=iso_timestamp())
        return JSONResponse(status_code=404, content=body.model_dump(by_alias=True))

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": str(exc.detail),
            "path": request.url.path,
            "timestamp": iso_timestamp(),
        },
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Error: %s",
        exc,
        extra={"path": request.url.path, "method": request.method},
    )
    if request.app.state.settings.app.expose_error_details:
        message = str(exc)
    else:
        message = GENERIC_ERROR_MESSAGE
    body = ErrorResponse(message=message, timestamp=iso_timestamp())
    return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
