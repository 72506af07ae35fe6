"""API models for listing wizard endpoints."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from listings.models import (
    AvailabilityAction,
    AvailabilityOverride,
    FileError,
    ImageRecord,
    PhotoOperationResult,
    UnitPreference,
    WizardState,
)


class WizardCreateRequest(BaseModel):
    """Request to open a new listing wizard."""

    model_config = ConfigDict(
        strict=False,
        json_schema_extra={
            "examples": [{"defaults": {"unit_preference": "imperial", "property_type": "loft"}}]
        },
    )

    defaults: dict[str, Any] = Field(
        default_factory=dict,
        description="Initial values for editable form fields",
    )


class FieldsUpdateRequest(BaseModel):
    """Draft values to write into the form (not validated until Next)."""

    model_config = ConfigDict(
        strict=False,
        json_schema_extra={
            "examples": [{"fields": {"name": "Sunny loft", "city": "Oslo"}}]
        },
    )

    fields: dict[str, Any] = Field(..., description="Field name to draft value")


class GoToRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    step: int = Field(..., description="Target step index", examples=[3])


class UnitPreferenceRequest(BaseModel):
    # Lax so the enum is accepted from its JSON string
    model_config = ConfigDict(strict=False)

    unit_preference: UnitPreference = Field(..., examples=["imperial"])


class NumericInputRequest(BaseModel):
    """A keystroke in a numeric input: the full text of the box."""

    model_config = ConfigDict(strict=True)

    field: str = Field(..., examples=["size_sqft"])
    value: str = Field(..., description="Raw text as typed", examples=["92.9"])


class BlurRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    field: str = Field(..., examples=["size_sqft"])


class NumericInputResponse(BaseModel):
    """Result of a keystroke or blur in a numeric input."""

    model_config = ConfigDict(strict=False)

    field: str
    written: bool = Field(..., description="Whether the form value was updated")
    display: str = Field(..., description="Display string for the input")
    value: Any = Field(None, description="Stored form value after the event")


class CoverRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    index: int = Field(..., ge=0, examples=[0])


class ReorderRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    from_index: int = Field(..., ge=0, examples=[2])
    to_index: int = Field(..., ge=0, examples=[0])


class AvailabilityRequest(BaseModel):
    """Calendar action applied to a set of dates."""

    model_config = ConfigDict(
        # Note: strict=False allows string-to-date coercion from JSON
        strict=False,
        json_schema_extra={
            "examples": [
                {"dates": ["2025-07-15", "2025-07-16"], "action": "price", "special_price": 120.0}
            ]
        },
    )

    dates: list[dt.date] = Field(..., min_length=1, description="Selected dates (YYYY-MM-DD)")
    action: AvailabilityAction = Field(..., description="block, unblock or price")
    special_price: float | None = Field(
        default=None,
        ge=0,
        description="Price for the 'price' action",
    )


class AvailabilityResponse(BaseModel):
    model_config = ConfigDict(strict=False)

    written: list[AvailabilityOverride]
    state: WizardState


class NavigationResponse(BaseModel):
    """Result of next/previous/goto."""

    model_config = ConfigDict(strict=False)

    moved: bool = Field(..., description="Whether current_step changed")
    state: WizardState


class UploadResponse(BaseModel):
    """Outcome of a photo upload batch."""

    model_config = ConfigDict(strict=False)

    uploaded: list[ImageRecord]
    errors: list[FileError]
    state: WizardState


class PhotoRemovalResponse(BaseModel):
    model_config = ConfigDict(strict=False)

    result: PhotoOperationResult
    state: WizardState


class SubmitResponse(BaseModel):
    """Outcome of submitting the listing."""

    model_config = ConfigDict(strict=False)

    success: bool
    property_id: str | None = None
    message: str | None = None
    image_warning: str | None = None
    state: WizardState
