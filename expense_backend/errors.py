# expense_backend/errors.py
# Error taxonomy and its mapping onto JSON error responses

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ExpenseBackendError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class MissingParameter(ExpenseBackendError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing required parameter"


class InvalidParameter(ExpenseBackendError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid parameter"


class InvalidCredentials(ExpenseBackendError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class NotFound(ExpenseBackendError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Expense not found"


class Conflict(ExpenseBackendError):
    status_code = status.HTTP_409_CONFLICT
    message = "Resource already exists"


class StoreFault(ExpenseBackendError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Database error"


class RouteNotFound(ExpenseBackendError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Endpoint not found"


def error_response(exc: ExpenseBackendError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _field_name(loc) -> str:
    # loc looks like ("body", "amount") or ("query", "user_id")
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def translate_validation_error(exc: RequestValidationError) -> ExpenseBackendError:
    """Collapse pydantic validation errors into MissingParameter / InvalidParameter."""
    missing = []
    invalid = []
    for error in exc.errors():
        name = _field_name(error.get("loc", ()))
        if error.get("type") == "missing":
            missing.append(name)
        else:
            invalid.append(f"{name}: {error.get('msg')}")

    if missing:
        return MissingParameter(f"Missing required parameter(s): {', '.join(missing)}")
    return InvalidParameter(f"Invalid parameter(s): {'; '.join(invalid)}")


# ===== HANDLERS =====

async def handle_backend_error(request: Request, exc: ExpenseBackendError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    return error_response(translate_validation_error(exc))


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    # Unmatched paths (404) and unmatched methods (405) are both unknown routes
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(RouteNotFound())
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error during %s %s", request.method, request.url.path)
    return error_response(StoreFault())


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error during %s %s", request.method, request.url.path)
    return error_response(ExpenseBackendError())


def register_exception_handlers(app: FastAPI):
    """Install the JSON error handlers on an application."""
    app.add_exception_handler(ExpenseBackendError, handle_backend_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
