"""Pydantic models for listing data entities."""

from .auth import AuthTokens, SignUpResult, UserSession
from .enums import (
    Amenity,
    AvailabilityAction,
    CancellationPolicy,
    NearbyFacility,
    PropertyStatus,
    PropertyType,
    SubmissionStatus,
    UnitPreference,
)
from .errors import ErrorCode, ErrorResponse, ListingError
from .listing import (
    DIMENSION_FIELDS,
    MAX_NUMERIC_VALUE,
    AvailabilityOverride,
    FormValue,
    ImageRecord,
)
from .property import AvailabilityEntry, Property, PropertyImage
from .wizard import (
    FileError,
    IncomingFile,
    PhotoOperationResult,
    SubmissionResult,
    UploadBatchResult,
    WizardState,
)

__all__ = [
    # Enums
    "Amenity",
    "AvailabilityAction",
    "CancellationPolicy",
    "NearbyFacility",
    "PropertyStatus",
    "PropertyType",
    "SubmissionStatus",
    "UnitPreference",
    # Errors
    "ErrorCode",
    "ErrorResponse",
    "ListingError",
    # Listing form
    "DIMENSION_FIELDS",
    "MAX_NUMERIC_VALUE",
    "AvailabilityOverride",
    "FormValue",
    "ImageRecord",
    # Persisted properties
    "AvailabilityEntry",
    "Property",
    "PropertyImage",
    # Wizard results
    "FileError",
    "IncomingFile",
    "PhotoOperationResult",
    "SubmissionResult",
    "UploadBatchResult",
    "WizardState",
    # Auth
    "AuthTokens",
    "SignUpResult",
    "UserSession",
]
