"""FastAPI exception handlers for converting ListingError to HTTP responses.

The ErrorCode-to-HTTP status mapping follows REST conventions:
- 400 Bad Request: Invalid input or out-of-range positions
- 401 Unauthorized: Authentication required or failed
- 403 Forbidden: Not the owner, or already signed in
- 404 Not Found: Wizard, property or image not found
- 502 Bad Gateway: Storage or database failure

Usage:
    from listings.api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)

from listings.api.models.common import format_validation_errors
from listings.models import ErrorCode, ListingError

logger = logging.getLogger(__name__)

# Map ErrorCode to HTTP status codes
ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    # Input errors -> 400 Bad Request
    ErrorCode.VALIDATION_FAILED: HTTP_400_BAD_REQUEST,
    ErrorCode.UNKNOWN_FIELD: HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_IMAGE_INDEX: HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_STEP: HTTP_400_BAD_REQUEST,
    ErrorCode.ACCOUNT_REQUEST_FAILED: HTTP_400_BAD_REQUEST,
    # Authentication errors -> 401 Unauthorized
    ErrorCode.AUTH_REQUIRED: HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: HTTP_401_UNAUTHORIZED,
    # Authorization errors -> 403 Forbidden
    ErrorCode.FORBIDDEN: HTTP_403_FORBIDDEN,
    ErrorCode.ALREADY_AUTHENTICATED: HTTP_403_FORBIDDEN,
    # Not found errors -> 404 Not Found
    ErrorCode.WIZARD_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.PROPERTY_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.IMAGE_NOT_FOUND: HTTP_404_NOT_FOUND,
    # Collaborator failures -> 502 Bad Gateway
    ErrorCode.UPLOAD_FAILED: HTTP_502_BAD_GATEWAY,
    ErrorCode.PERSISTENCE_FAILED: HTTP_502_BAD_GATEWAY,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode, defaulting to 400."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def listing_error_handler(request: Request, exc: ListingError) -> JSONResponse:
    """Convert a ListingError into an ErrorResponse body with a matching status."""
    status_code = get_http_status_for_error(exc.code)
    return JSONResponse(
        status_code=status_code,
        content=exc.to_error_response().model_dump(mode="json"),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request body/query validation errors in the standard envelope."""
    response = format_validation_errors(list(exc.errors()))
    return JSONResponse(
        status_code=422,
        content=response.model_dump(mode="json"),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback for uncaught exceptions; internal details are not exposed."""
    logger.exception("Unhandled exception: %s", exc)

    error_response = {
        "success": False,
        "error_code": "ERR_INTERNAL",
        "message": "An unexpected error occurred",
        "recovery": "Please try again later",
        "details": None,
    }

    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(ListingError, listing_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
