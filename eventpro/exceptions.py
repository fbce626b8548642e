# eventpro/exceptions.py
from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.responses import Response


class EventProError(Exception):
    """Base class for every error a request can fail with."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(EventProError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ValidationError(EventProError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ConflictError(EventProError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class ForbiddenError(EventProError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class AuthenticationError(EventProError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class InvalidStateError(EventProError):
    """The operation is not allowed in the record's current lifecycle state."""

    def __init__(self, message: str, current_state: str) -> None:
        super().__init__(message, 400)
        self.current_state = current_state


class InternalError(EventProError):
    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message, 500)


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


async def eventpro_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, EventProError) else InternalError(str(exc))
    if error.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {error.message}")
    return JSONResponse(status_code=error.status_code, content={"detail": error.message})


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(error.errors())},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    EventProError: eventpro_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
