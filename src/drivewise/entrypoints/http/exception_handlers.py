"""Exception handlers that turn failures into the shared error body.

Every error response is ``{detail, code, errors?}``. Log records carry the
error text under ``error_message``; ``message`` is reserved by LogRecord.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from drivewise.domain.errors import DomainError

logger = logging.getLogger(__name__)

HTTP_422_UNPROCESSABLE = 422

STATUS_BY_ERROR_CODE: dict[str, int] = {
    "VALIDATION_ERROR": HTTP_422_UNPROCESSABLE,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _request_context(request: Request) -> dict[str, Any]:
    return {"path": request.url.path, "method": request.method}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Answer a DomainError with the status registered for its error code.

    Codes missing from STATUS_BY_ERROR_CODE are 400. Server-side codes are
    logged at ERROR with the traceback, client-side ones at INFO.
    """
    error_dict = exc.to_dict()
    status_code = STATUS_BY_ERROR_CODE.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    if status_code >= 500:
        logger.error(
            "Domain error occurred",
            exc_info=exc,
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "context": exc.context,
                **_request_context(request),
            },
        )
    else:
        logger.info(
            "Client error",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                **_request_context(request),
            },
        )

    response_content: dict[str, Any] = {
        "detail": error_dict.get("message", str(exc)),
        "code": error_dict.get("code", exc.error_code),
    }

    # Field errors from ValidationError
    if "errors" in error_dict:
        response_content["errors"] = error_dict["errors"]

    return JSONResponse(status_code=status_code, content=response_content)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Flatten pydantic errors into one entry per offending field.

    Typical triggers: a price such as "30,000" or one longer than 15 digits,
    schedule_months above 72, an empty brackets list.
    """
    errors = []

    for error in exc.errors():
        # "price", not "body.price"
        field_path = ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query"))

        errors.append(
            {
                "field": field_path,
                "message": error["msg"],
                "code": error["type"],
            }
        )

    logger.info(
        "Request validation error",
        extra={"errors": errors, **_request_context(request)},
    )

    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE,
        content={
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """A ValueError that escaped a conversion is reported as INVALID_VALUE."""
    logger.info(
        "Value error",
        extra={"error_message": str(exc), **_request_context(request)},
    )

    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE,
        content={
            "detail": str(exc),
            "code": "INVALID_VALUE",
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is a 500 with a fixed body; details only go to the log."""
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            **_request_context(request),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``, most specific exception first."""
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(ValueError, handle_value_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered successfully")
