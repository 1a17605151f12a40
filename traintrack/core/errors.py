"""Application error taxonomy and the single boundary that turns errors into JSON."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base error carrying the HTTP status it is reported with."""

    name = "INTERNAL SERVER ERROR"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, errors: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self) -> dict:
        payload: dict = {
            "name": self.name,
            "httpCode": int(self.status),
            "message": self.message,
        }
        if self.errors:
            payload["errors"] = list(self.errors)
        return payload


class BadRequestError(AppError):
    name = "BAD REQUEST"
    status = HTTPStatus.BAD_REQUEST
    default_message = "Bad Request"


class UnauthorizedError(AppError):
    name = "UNAUTHORIZED"
    status = HTTPStatus.UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    name = "FORBIDDEN"
    status = HTTPStatus.FORBIDDEN
    default_message = "You do not have permission to access this resource"


class NotFoundError(AppError):
    name = "NOT FOUND"
    status = HTTPStatus.NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    name = "CONFLICT"
    status = HTTPStatus.CONFLICT
    default_message = "Conflict"


def _error_response(error: AppError) -> JSONResponse:
    headers = None
    if error.status == HTTPStatus.UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=int(error.status), content=error.to_dict(), headers=headers)


def _format_validation_error(err: dict) -> str:
    loc = [str(part) for part in err.get("loc", ()) if part != "body"]
    field = ".".join(loc) or "body"
    if err.get("type") == "missing":
        return f"Required field {field} is missing"
    return f"{field}: {err.get('msg', 'invalid value')}"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.errors:
        logger.error("%s %s: %s [%s]", request.method, request.url.path, exc.message, ", ".join(exc.errors))
    else:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await app_error_handler(
        request,
        BadRequestError(
            "Validation Errors",
            errors=[_format_validation_error(e) for e in exc.errors()],
        ),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return await app_error_handler(request, BadRequestError("Referenced entity does not exist or constraint violated"))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(AppError())


def register_exception_handlers(app: FastAPI) -> None:
    """Route every failure through one JSON error envelope."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
