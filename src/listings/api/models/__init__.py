"""API request/response models."""

from .auth import (
    LoginRequest,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    SessionResponse,
    SignUpRequest,
)
from .common import (
    SuccessMessage,
    ValidationErrorDetail,
    ValidationErrorResponse,
    format_validation_errors,
)
from .properties import PropertyListResponse, StatusUpdateRequest
from .wizard import (
    AvailabilityRequest,
    AvailabilityResponse,
    BlurRequest,
    CoverRequest,
    FieldsUpdateRequest,
    GoToRequest,
    NavigationResponse,
    NumericInputRequest,
    NumericInputResponse,
    PhotoRemovalResponse,
    ReorderRequest,
    SubmitResponse,
    UnitPreferenceRequest,
    UploadResponse,
    WizardCreateRequest,
)

__all__ = [
    # Common
    "SuccessMessage",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
    "format_validation_errors",
    # Auth
    "LoginRequest",
    "PasswordResetConfirmRequest",
    "PasswordResetRequest",
    "SessionResponse",
    "SignUpRequest",
    # Properties
    "PropertyListResponse",
    "StatusUpdateRequest",
    # Wizard
    "AvailabilityRequest",
    "AvailabilityResponse",
    "BlurRequest",
    "CoverRequest",
    "FieldsUpdateRequest",
    "GoToRequest",
    "NavigationResponse",
    "NumericInputRequest",
    "NumericInputResponse",
    "PhotoRemovalResponse",
    "ReorderRequest",
    "SubmitResponse",
    "UnitPreferenceRequest",
    "UploadResponse",
    "WizardCreateRequest",
]
