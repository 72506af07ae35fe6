"""Standard error codes for listing operations.

All services raise ListingError with one of these codes; the API layer
converts them into ErrorResponse bodies with a matching HTTP status.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    # Listing error codes (ERR_001-ERR_009)
    VALIDATION_FAILED = "ERR_001"
    UNKNOWN_FIELD = "ERR_002"
    WIZARD_NOT_FOUND = "ERR_003"
    PROPERTY_NOT_FOUND = "ERR_004"
    IMAGE_NOT_FOUND = "ERR_005"
    INVALID_IMAGE_INDEX = "ERR_006"
    UPLOAD_FAILED = "ERR_007"
    PERSISTENCE_FAILED = "ERR_008"
    INVALID_STEP = "ERR_009"

    # Authentication error codes (ERR_AUTH_001-ERR_AUTH_005)
    AUTH_REQUIRED = "ERR_AUTH_001"
    ALREADY_AUTHENTICATED = "ERR_AUTH_002"
    FORBIDDEN = "ERR_AUTH_003"
    INVALID_CREDENTIALS = "ERR_AUTH_004"
    ACCOUNT_REQUEST_FAILED = "ERR_AUTH_005"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Some fields are invalid",
    ErrorCode.UNKNOWN_FIELD: "Unknown listing field",
    ErrorCode.WIZARD_NOT_FOUND: "Listing wizard session not found",
    ErrorCode.PROPERTY_NOT_FOUND: "Property not found",
    ErrorCode.IMAGE_NOT_FOUND: "Image not found",
    ErrorCode.INVALID_IMAGE_INDEX: "Image position is out of range",
    ErrorCode.UPLOAD_FAILED: "Image upload failed",
    ErrorCode.PERSISTENCE_FAILED: "Failed to save the property",
    ErrorCode.INVALID_STEP: "Wizard step is out of range",
    ErrorCode.AUTH_REQUIRED: "You must be logged in to perform this action",
    ErrorCode.ALREADY_AUTHENTICATED: "You are already logged in",
    ErrorCode.FORBIDDEN: "You don't have permission to access this property",
    ErrorCode.INVALID_CREDENTIALS: "Invalid email or password",
    ErrorCode.ACCOUNT_REQUEST_FAILED: "The account request could not be completed",
}

# Recovery suggestions for clients
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Correct the highlighted fields and try again",
    ErrorCode.UNKNOWN_FIELD: "Check the field names against the listing form",
    ErrorCode.WIZARD_NOT_FOUND: "Start a new listing",
    ErrorCode.PROPERTY_NOT_FOUND: "Check the property ID",
    ErrorCode.IMAGE_NOT_FOUND: "Refresh the photo list",
    ErrorCode.INVALID_IMAGE_INDEX: "Pick an image from the current photo list",
    ErrorCode.UPLOAD_FAILED: "Select the file again to retry the upload",
    ErrorCode.PERSISTENCE_FAILED: "Your listing is kept; submit again",
    ErrorCode.INVALID_STEP: "Pick a step between the first and the last",
    ErrorCode.AUTH_REQUIRED: "Log in and try again",
    ErrorCode.ALREADY_AUTHENTICATED: "Log out first or continue to the dashboard",
    ErrorCode.FORBIDDEN: "Only the property owner can do this",
    ErrorCode.INVALID_CREDENTIALS: "Check your email and password",
    ErrorCode.ACCOUNT_REQUEST_FAILED: "Try again later",
}


class ErrorResponse(BaseModel):
    """Standard error response format for failed operations."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class ListingError(Exception):
    """Exception raised by listing operations.

    Can be caught and converted to an ErrorResponse for API responses.
    """

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse.from_code(self.code, self.details)
