"""Exception-to-response mapping for the Cafe API.

    CafeApiError            -> exc.http_status, exc.to_response()
                               (CafeValidationError: 422 {"error": {field: [messages]}})
    RequestValidationError  -> 400, missing "cafe" envelope or malformed body
    Exception               -> 500, generic body; storage failures land here
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cafe_api.core.errors import CafeApiError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_QUIET = (ErrorSeverity.INFO, ErrorSeverity.WARNING)


async def handle_cafe_api_error(request: Request, exc: CafeApiError):
    logger.log(
        logging.WARNING if exc.severity in _QUIET else logging.ERROR,
        exc.message,
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError,
):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected request body: {[d['field'] for d in details]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": details,
        }},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": ErrorCategory.INTERNAL.value,
            "severity": ErrorSeverity.CRITICAL.value,
        }},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CafeApiError, handle_cafe_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
