"""Error taxonomy shared by the services and the HTTP layer."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BookCircleError(Exception):
    status_code = 500

    def __init__(self, detail):
        super().__init__(detail)
        self.detail = detail


class ValidationError(BookCircleError):
    """Bad input. ``errors`` holds every violated field, not just the first."""

    status_code = 400

    def __init__(self, errors: list[dict]):
        super().__init__(errors)
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class Unauthorized(BookCircleError):
    status_code = 401


class Forbidden(BookCircleError):
    status_code = 403


class NotFound(BookCircleError):
    status_code = 404


class Conflict(BookCircleError):
    status_code = 409


def _field_name(loc: tuple) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI puts in front.
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


async def _handle_domain_error(request: Request, exc: BookCircleError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"field": _field_name(tuple(e.get("loc", ()))), "message": e.get("msg", "Invalid value")} for e in exc.errors()]
    return JSONResponse(status_code=400, content={"detail": errors})


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookCircleError, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)
