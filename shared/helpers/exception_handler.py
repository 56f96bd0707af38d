import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from shared.core.errors import AppError, HTTP_STATUS_BY_KIND
from shared.core.schemas import ErrorResult
from shared.utils.enums import ErrorKind

logger = logging.getLogger(__name__)

KIND_BY_HTTP_STATUS = {status: kind for kind, status in HTTP_STATUS_BY_KIND.items()
                       if kind not in (ErrorKind.UPSTREAM_FAILURE, ErrorKind.CONFIGURATION)}


def _error(kind: ErrorKind, message: str, status_code: int):
    wrapped = ErrorResult(error=message, kind=kind.value).model_dump()
    return JSONResponse(content=wrapped, status_code=status_code)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return "; ".join(parts) or "Invalid request"


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.http_status >= 500:
            logger.error("%s %s failed: %s (%s)", request.method,
                         request.url.path, exc.message, exc.kind.value)
        return _error(exc.kind, exc.message, exc.http_status)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        kind = KIND_BY_HTTP_STATUS.get(exc.status_code, ErrorKind.INVALID_INPUT)
        return _error(kind, str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error(ErrorKind.INVALID_INPUT, _describe_validation_error(exc), 400)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)
        return _error(ErrorKind.INTERNAL, "Internal server error", 500)
