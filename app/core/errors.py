from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from app.core.logging import get_logger
from app.core.settings import settings


class AppError(Exception):
    """Base for errors that map onto an HTTP status at the request boundary."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"error": self.message}


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)

    def to_body(self) -> dict:
        return {"errors": self.errors}


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


def _format_request_error(err: dict) -> str:
    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
    msg = err.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(exc.to_body(), status_code=exc.status_code)


async def request_validation_handler(
    _: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [_format_request_error(e) for e in exc.errors()]
    return JSONResponse({"errors": errors}, status_code=status.HTTP_400_BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    get_logger().bind(path=request.url.path, method=request.method).exception(
        "request.unhandled_error", error=str(exc)
    )
    message = (
        str(exc) if settings.expose_error_details else "An unexpected error occurred"
    )
    return JSONResponse(
        {"error": "Server error", "message": message},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
