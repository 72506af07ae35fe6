"""Listing services: wizard, validation, media, persistence and auth."""

from .auth_service import AccountService
from .auth_session import AuthSession
from .availability import AvailabilityCalendar
from .dynamodb import DynamoDBService
from .inputs import PricingInputs, sanitize_numeric
from .photos import PhotoManager
from .properties import PropertyService
from .storage import ObjectStorageService, StorageResult
from .submission import SubmissionAdapter, sanitize_numeric_field
from .units import DimensionInputs
from .validators import validate_listing, validate_step
from .wizard import ListingWizard
from .wizard_store import WizardStore

__all__ = [
    "AccountService",
    "AuthSession",
    "AvailabilityCalendar",
    "DimensionInputs",
    "DynamoDBService",
    "ListingWizard",
    "ObjectStorageService",
    "PhotoManager",
    "PricingInputs",
    "PropertyService",
    "StorageResult",
    "SubmissionAdapter",
    "WizardStore",
    "sanitize_numeric",
    "sanitize_numeric_field",
    "validate_listing",
    "validate_step",
]
