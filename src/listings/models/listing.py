"""Listing form models.

FormValue is the single in-memory aggregate edited by one wizard session.
It holds *draft* input: assignment is not validated, so a
half-typed or out-of-range value can sit in the form until the owning step
validator reports it. Dimension fields are always stored in imperial units
(square feet / feet); ``unit_preference`` only affects display.
"""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import CancellationPolicy, PropertyType, UnitPreference

# Largest value a NUMERIC(10, 2) column can hold
MAX_NUMERIC_VALUE = 99_999_999.99

DIMENSION_FIELDS: tuple[str, ...] = (
    "size_sqft",
    "length_ft",
    "width_ft",
    "ceiling_height_ft",
)


class ImageRecord(BaseModel):
    """An uploaded listing photo."""

    model_config = ConfigDict(strict=True)

    id: str
    storage_path: str
    public_url: str
    display_name: str
    byte_size: int = Field(ge=0)
    mime_type: str


class AvailabilityOverride(BaseModel):
    """Availability exception for a single calendar date."""

    model_config = ConfigDict(strict=False)

    date: dt.date
    is_available: bool
    special_price: float | None = None


class FormValue(BaseModel):
    """Aggregate of every field across all wizard steps."""

    model_config = ConfigDict(strict=False, validate_assignment=False)

    # Identity
    name: str = ""
    property_type: Any = PropertyType.HOUSE.value
    description: str = ""

    # Address
    address_line1: str = ""
    address_line2: str | None = None
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    latitude: float | None = None
    longitude: float | None = None

    # Dimensions (canonical imperial)
    size_sqft: Any = None
    length_ft: Any = None
    width_ft: Any = None
    ceiling_height_ft: Any = None
    unit_preference: UnitPreference = UnitPreference.METRIC

    # Capacity and classification
    max_guests: Any = 10
    bedrooms: Any = 1
    bathrooms: Any = 1
    amenities: list[Any] = Field(default_factory=list)
    nearby_facilities: list[Any] = Field(default_factory=list)
    additional_info: str = ""

    # Media
    images: list[ImageRecord] = Field(default_factory=list)
    cover_image_index: int | None = None

    # Pricing
    price_per_hour: Any = None
    price_per_day: Any = None
    minimum_hours: Any = 1
    discount_weekly: Any = 0
    discount_monthly: Any = 0

    # Policy
    rules: str = ""
    cancellation_policy: Any = CancellationPolicy.FLEXIBLE.value
    noise_restrictions: bool = False
    no_smoking: bool = False
    no_pets: bool = False
    no_parties: bool = False

    # Availability
    default_availability: bool = True
    availability: list[AvailabilityOverride] = Field(default_factory=list)

    @classmethod
    def editable_fields(cls) -> frozenset[str]:
        """Field names that may be written directly through the wizard.

        Media and availability lists are excluded: they are only changed
        through the photo manager and the availability calendar so their
        invariants hold.
        """
        return frozenset(cls.model_fields) - {"images", "cover_image_index", "availability"}
