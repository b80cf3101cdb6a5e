"""Error taxonomy and FastAPI exception handlers."""

import logging
from enum import Enum
from typing import Optional

import pydantic
from fastapi import (
    Request,
    status,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Kinds of failure a request can end in."""
    BAD_REQUEST = "bad_request"
    UNSUPPORTED_MEDIA = "unsupported_media"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNSUPPORTED_MEDIA: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class FileServiceError(Exception):
    """
    A failure tagged with its kind.

    :param kind: what went wrong; decides the HTTP status.
    :param message: text returned to the client.
    :param cause: the underlying exception, if any.
    """

    def __init__(self, kind: ErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause

    def __repr__(self) -> str:
        return f"FileServiceError(kind={self.kind.value!r}, message={self.message!r})"


async def handle_file_service_error(request: Request, exc: FileServiceError) -> PlainTextResponse:
    """Map a tagged error to its status code with the message as a plain-text body."""
    if exc.kind is ErrorKind.INTERNAL:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.kind.value}): {exc.message}")
    return PlainTextResponse(exc.message, status_code=exc.kind.status_code)


async def handle_request_validation_errors(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    """Malformed requests, e.g. a multipart form without a `file` part, are bad requests."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}")
    return await handle_file_service_error(
        request,
        FileServiceError(ErrorKind.BAD_REQUEST, "; ".join(messages), cause=exc),
    )


async def handle_http_exceptions(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Errors raised by the framework itself, such as an unparsable body or an unknown route."""
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> PlainTextResponse:
    """A response model failed validation; this is a server-side bug."""
    logger.error(f"Response validation failed for {request.url.path}: {exc}")
    return PlainTextResponse(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error for {request.method} {request.url.path}")
        return PlainTextResponse(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
