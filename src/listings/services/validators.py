"""Step validators for the listing wizard.

Each wizard step owns a disjoint subset of FormValue fields and a pydantic
sub-schema for them. The sub-schemas are merged into ListingSchema for the
final submission check, so a listing that passes every step also passes the
whole-form check.

Validation never raises: failures come back as a mapping of field name to
user-facing messages.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from listings.models import (
    Amenity,
    AvailabilityOverride,
    CancellationPolicy,
    FormValue,
    ImageRecord,
    NearbyFacility,
    PropertyType,
)

FieldErrors = dict[str, list[str]]


class _StepSchema(BaseModel):
    # Lax mode mirrors form input: "3" is accepted for an int field
    model_config = ConfigDict(strict=False, extra="ignore")


class IdentityStep(_StepSchema):
    name: str = Field(min_length=3)
    property_type: PropertyType
    description: str = Field(min_length=20)


class AddressStep(_StepSchema):
    address_line1: str = Field(min_length=3)
    address_line2: str | None = None
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)


class DimensionsStep(_StepSchema):
    size_sqft: float = Field(gt=0)
    length_ft: float | None = Field(default=None, gt=0)
    width_ft: float | None = Field(default=None, gt=0)
    ceiling_height_ft: float | None = Field(default=None, gt=0)


class CapacityStep(_StepSchema):
    max_guests: int = Field(gt=0)
    bedrooms: int = Field(ge=0)
    bathrooms: int = Field(ge=0)
    amenities: list[Amenity] = Field(default_factory=list)
    nearby_facilities: list[NearbyFacility] = Field(default_factory=list)
    additional_info: str | None = None


class PhotosStep(_StepSchema):
    images: list[ImageRecord] = Field(default_factory=list)
    cover_image_index: int | None = None

    @field_validator("cover_image_index")
    @classmethod
    def cover_must_point_at_an_image(
        cls, value: int | None, info: ValidationInfo
    ) -> int | None:
        if value is None:
            return value
        images = info.data.get("images") or []
        if not 0 <= value < len(images):
            raise ValueError("Cover image must be one of the uploaded images")
        return value


class PricingStep(_StepSchema):
    price_per_hour: float = Field(gt=0)
    price_per_day: float = Field(gt=0)
    minimum_hours: int | None = Field(default=None, gt=0)
    discount_weekly: float | None = Field(default=None, ge=0, le=100)
    discount_monthly: float | None = Field(default=None, ge=0, le=100)


class PolicyStep(_StepSchema):
    rules: str | None = None
    cancellation_policy: CancellationPolicy
    noise_restrictions: bool = False
    no_smoking: bool = False
    no_pets: bool = False
    no_parties: bool = False


class AvailabilityStep(_StepSchema):
    default_availability: bool = True
    availability: list[AvailabilityOverride] = Field(default_factory=list)

    @field_validator("availability")
    @classmethod
    def special_prices_not_negative(
        cls, value: list[AvailabilityOverride]
    ) -> list[AvailabilityOverride]:
        for override in value:
            if override.special_price is not None and override.special_price < 0:
                raise ValueError(
                    f"Special price for {override.date.isoformat()} must be 0 or more"
                )
        return value


class ListingSchema(
    IdentityStep,
    AddressStep,
    DimensionsStep,
    CapacityStep,
    PhotosStep,
    PricingStep,
    PolicyStep,
    AvailabilityStep,
):
    """Whole-listing schema: every step's fields and checks."""


# Order defines the wizard's step indices
STEPS: tuple[tuple[str, type[_StepSchema]], ...] = (
    ("identity", IdentityStep),
    ("address", AddressStep),
    ("dimensions", DimensionsStep),
    ("capacity", CapacityStep),
    ("photos", PhotosStep),
    ("pricing", PricingStep),
    ("policy", PolicyStep),
    ("availability", AvailabilityStep),
)

STEP_NAMES: tuple[str, ...] = tuple(name for name, _ in STEPS)
TOTAL_STEPS = len(STEPS)


def _field_messages(
    required: str | None = None,
    positive: str | None = None,
    non_negative: str | None = None,
    too_short: str | None = None,
    not_a_number: str | None = None,
    out_of_range: str | None = None,
    choice: str | None = None,
) -> dict[str, str]:
    """Map pydantic error types onto a field's user-facing messages."""
    messages: dict[str, str] = {}
    if required:
        for error_type in ("missing", "string_type", "float_type", "int_type"):
            messages[error_type] = required
    if positive:
        messages["greater_than"] = positive
    if non_negative:
        messages["greater_than_equal"] = non_negative
    if too_short:
        messages["string_too_short"] = too_short
    if not_a_number:
        for error_type in ("float_parsing", "int_parsing", "int_from_float"):
            messages[error_type] = not_a_number
    if out_of_range:
        messages["greater_than_equal"] = out_of_range
        messages["less_than_equal"] = out_of_range
    if choice:
        messages["enum"] = choice
    return messages


FIELD_MESSAGES: dict[str, dict[str, str]] = {
    # Identity
    "name": _field_messages(
        required="Property name must be at least 3 characters",
        too_short="Property name must be at least 3 characters",
    ),
    "property_type": _field_messages(choice="Select a valid property type"),
    "description": _field_messages(
        required="Description must be at least 20 characters",
        too_short="Description must be at least 20 characters",
    ),
    # Address
    "address_line1": _field_messages(
        required="Address line 1 is required", too_short="Address line 1 is required"
    ),
    "city": _field_messages(required="City is required", too_short="City is required"),
    "state": _field_messages(
        required="State/Province is required", too_short="State/Province is required"
    ),
    "postal_code": _field_messages(
        required="Postal code is required", too_short="Postal code is required"
    ),
    "country": _field_messages(required="Country is required", too_short="Country is required"),
    # Dimensions
    "size_sqft": _field_messages(
        required="Size is required",
        positive="Size must be positive",
        not_a_number="Size must be a number",
    ),
    "length_ft": _field_messages(
        positive="Length must be positive", not_a_number="Length must be a number"
    ),
    "width_ft": _field_messages(
        positive="Width must be positive", not_a_number="Width must be a number"
    ),
    "ceiling_height_ft": _field_messages(
        positive="Ceiling height must be positive",
        not_a_number="Ceiling height must be a number",
    ),
    # Capacity
    "max_guests": _field_messages(
        required="Maximum guests is required",
        positive="Maximum guests must be positive",
        not_a_number="Maximum guests must be a whole number",
    ),
    "bedrooms": _field_messages(
        required="Bedrooms is required",
        non_negative="Bedrooms must be 0 or more",
        not_a_number="Bedrooms must be a whole number",
    ),
    "bathrooms": _field_messages(
        required="Bathrooms is required",
        non_negative="Bathrooms must be 0 or more",
        not_a_number="Bathrooms must be a whole number",
    ),
    "amenities": _field_messages(choice="Unknown amenity"),
    "nearby_facilities": _field_messages(choice="Unknown nearby facility"),
    # Pricing
    "price_per_hour": _field_messages(
        required="Hourly rate is required",
        positive="Hourly rate must be positive",
        not_a_number="Hourly rate must be a number",
    ),
    "price_per_day": _field_messages(
        required="Daily rate is required",
        positive="Daily rate must be positive",
        not_a_number="Daily rate must be a number",
    ),
    "minimum_hours": _field_messages(
        positive="Minimum hours must be positive",
        not_a_number="Minimum hours must be a whole number",
    ),
    "discount_weekly": _field_messages(
        out_of_range="Weekly discount must be between 0 and 100",
        not_a_number="Weekly discount must be a number",
    ),
    "discount_monthly": _field_messages(
        out_of_range="Monthly discount must be between 0 and 100",
        not_a_number="Monthly discount must be a number",
    ),
    # Policy
    "cancellation_policy": _field_messages(choice="Select a cancellation policy"),
}


def _message_for(field: str, error: dict[str, Any]) -> str:
    custom = FIELD_MESSAGES.get(field, {}).get(error["type"])
    if custom:
        return custom
    if error["type"] == "value_error" and "error" in error.get("ctx", {}):
        return str(error["ctx"]["error"])
    return str(error["msg"])


def _collect_errors(exc: ValidationError) -> FieldErrors:
    errors: FieldErrors = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else "__root__"
        message = _message_for(field, error)
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def _run_schema(schema: type[BaseModel], form: FormValue) -> FieldErrors:
    data = {name: getattr(form, name) for name in schema.model_fields}
    try:
        schema.model_validate(data)
    except ValidationError as exc:
        return _collect_errors(exc)
    return {}


def step_fields(step: int) -> frozenset[str]:
    """FormValue fields owned by a step."""
    _, schema = STEPS[step]
    return frozenset(schema.model_fields)


def validate_step(step: int, form: FormValue) -> FieldErrors:
    """Validate only the fields owned by one step.

    Args:
        step: Step index in [0, TOTAL_STEPS)
        form: The wizard's form value (not modified)

    Returns:
        Field-level error messages; empty when the step is valid.

    Raises:
        IndexError: If step is out of range
    """
    if not 0 <= step < TOTAL_STEPS:
        raise IndexError(f"Step {step} out of range")
    _, schema = STEPS[step]
    return _run_schema(schema, form)


def validate_listing(form: FormValue) -> FieldErrors:
    """Validate the whole form against ListingSchema."""
    return _run_schema(ListingSchema, form)


def first_invalid_step(errors: FieldErrors) -> int | None:
    """Index of the earliest step owning a field in ``errors``."""
    for index in range(TOTAL_STEPS):
        if not step_fields(index).isdisjoint(errors):
            return index
    return None
