"""HTTP boundary errors rendered as :class:`ApiErrorPayload` responses."""

from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .deadlock_api.errors import NotFoundError
from .enums import ErrorCode
from .exceptions import InvalidSteamIdError
from .schemas import ApiErrorPayload

logger = structlog.get_logger(__name__)


class ApiRequestError(Exception):
    """A request that ends in a structured error payload."""

    def __init__(
        self,
        code: ErrorCode,
        status: int,
        error: str,
        details: Optional[str] = None,
    ):
        super().__init__(error)
        self.payload = ApiErrorPayload(code=code, status=status, error=error, details=details)

    @classmethod
    def bad_request(cls, error: str, details: Optional[str] = None) -> "ApiRequestError":
        return cls(ErrorCode.BAD_REQUEST, 400, error, details)

    @classmethod
    def internal(cls, error: str) -> "ApiRequestError":
        return cls(ErrorCode.INTERNAL_ERROR, 500, error)


def api_error_from_exception(exc: Exception, failure_message: str) -> ApiRequestError:
    """
    Translate an exception escaping the stats service into an API error.

    :param exc: Exception raised by the service
    :param failure_message: Message used for unexpected failures
    :returns: Error to raise from the route handler
    """
    if isinstance(exc, ApiRequestError):
        return exc
    if isinstance(exc, InvalidSteamIdError):
        return ApiRequestError(ErrorCode.INVALID_STEAM_ID64, 400, "Invalid SteamID64.", exc.message)
    if isinstance(exc, NotFoundError):
        return ApiRequestError(ErrorCode.NOT_FOUND, 404, "Resource not found upstream.", str(exc))

    logger.error(
        failure_message,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return ApiRequestError.internal(failure_message)


def error_response(payload: ApiErrorPayload) -> JSONResponse:
    return JSONResponse(status_code=payload.status, content=payload.to_json_dict())


async def api_request_error_handler(request: Request, exc: ApiRequestError) -> JSONResponse:
    return error_response(exc.payload)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Request validation failed", path=request.url.path, errors=exc.errors())
    fields = ", ".join(
        ".".join(str(part) for part in error.get("loc", ()) if part != "query")
        for error in exc.errors()
    )
    return error_response(
        ApiErrorPayload(
            code=ErrorCode.BAD_REQUEST,
            status=400,
            error="Invalid request parameters.",
            details=fields or None,
        )
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the structured error handlers on an application."""
    app.add_exception_handler(ApiRequestError, api_request_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, request_validation_error_handler  # type: ignore[arg-type]
    )
