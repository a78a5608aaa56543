# Third-party imports
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import sentry_sdk

# Local application imports
from votetrack.core.exceptions import (
    DuplicateEntityError,
    DuplicateVoteRecordError,
    NotFoundError,
    PersistenceError,
    ReferentialError,
    ValidationError,
    VoteTrackError,
)
from votetrack.core.monitoring.logging import get_logger
from votetrack.schemas.common import BaseResponse

logger = get_logger("api.errors")

# Map specific HTTP status codes to custom error codes
ERROR_CODES = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    409: "conflict",
    422: "unprocessable_entity",
    500: "internal_server_error",
}

# Most specific first
DOMAIN_STATUS = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (DuplicateVoteRecordError, 409),
    (DuplicateEntityError, 409),
    (ReferentialError, 409),
    (PersistenceError, 500),
)


def status_for(exc: VoteTrackError) -> int:
    for exc_type, status_code in DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(VoteTrackError)
    async def domain_exception_handler(
        request: Request,  # noqa
        exc: VoteTrackError,
    ) -> JSONResponse:
        status_code = status_for(exc)
        if status_code >= 500:
            # Keep the driver detail out of the response
            detail = exc.detail if isinstance(exc, PersistenceError) else str(exc)
            logger.error(f"{request.method} {request.url.path} failed: {detail}")
            sentry_sdk.capture_exception(exc)
            response = BaseResponse.failure(code=ERROR_CODES[500], message=exc.message)
        else:
            response = BaseResponse.failure(code=ERROR_CODES[status_code], message=str(exc), details=exc.details())
        return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,  # noqa
        exc: HTTPException,
    ) -> JSONResponse:
        error_code = ERROR_CODES.get(exc.status_code, "error")
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        response = BaseResponse.failure(code=error_code, message=detail)
        return JSONResponse(status_code=exc.status_code, content=response.model_dump(), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,  # noqa
        exc: RequestValidationError,
    ) -> JSONResponse:
        error_details = []
        for error in exc.errors():
            message = error.get("msg", "")
            # Remove "Value error, " prefix
            val_error_prefix = "Value error, "
            if message.startswith(val_error_prefix):
                message = message[len(val_error_prefix) :]
            location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            error_details.append(f"{location}: {message}" if location else message)

        # Join the first few messages or use a default if empty
        max_errors = 5
        shown = error_details[:max_errors]
        if len(error_details) > max_errors:
            shown.append("...and more errors")
        detail = "; ".join(shown) if shown else "Invalid request data"

        response = BaseResponse.failure(code="bad_request", message=detail)
        return JSONResponse(status_code=400, content=response.model_dump())

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,  # noqa
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        sentry_sdk.capture_exception(exc)
        response = BaseResponse.failure(
            code="internal_server_error",
            message="An unexpected error occurred. Please try again later.",
        )
        return JSONResponse(status_code=500, content=response.model_dump())
