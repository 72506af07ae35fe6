"""Listing wizard endpoints.

Provides REST endpoints for one wizard session:
- Opening, reading and discarding a wizard
- Writing draft field values
- Step navigation (next validates the active step; previous/goto do not)
- Dimension and pricing inputs with display strings
- Photo upload, removal, cover selection and ordering
- Availability calendar edits
- Final submission

All endpoints require authentication; a wizard can only be used by the
user who opened it.
"""

import datetime as dt

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_502_BAD_GATEWAY,
)

from listings.api.dependencies import get_wizard_store, require_user
from listings.api.models.common import SuccessMessage
from listings.api.models.wizard import (
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
from listings.models import (
    ErrorCode,
    IncomingFile,
    ListingError,
    UserSession,
    WizardState,
)
from listings.services.wizard import ListingWizard
from listings.services.wizard_store import WizardStore

router = APIRouter(prefix="/listings/wizard", tags=["wizard"])


def get_owned_wizard(
    wizard_id: str,
    user: UserSession = Depends(require_user),
    store: WizardStore = Depends(get_wizard_store),
) -> ListingWizard:
    """Resolve the wizard in the path for its owner (404/403 otherwise)."""
    return store.get(wizard_id, user.user_id)


# === Session ===


@router.post(
    "",
    summary="Open a listing wizard",
    description="""
Start a new property listing.

**Requires JWT authentication.**

Creates an in-memory wizard at step 0 with default form values. Optional
`defaults` are written as draft values (for example `unit_preference`).

**Notes:**
- Nothing is persisted until the wizard is submitted
- Unknown field names in `defaults` are rejected with 400
""",
    response_description="Initial wizard state",
    response_model=WizardState,
    status_code=HTTP_201_CREATED,
    responses={
        201: {"description": "Wizard opened"},
        400: {"description": "Unknown field in defaults"},
        401: {"description": "Authentication required"},
    },
)
async def create_wizard(
    body: WizardCreateRequest | None = None,
    user: UserSession = Depends(require_user),
    store: WizardStore = Depends(get_wizard_store),
) -> WizardState:
    defaults = body.defaults if body else None
    wizard = store.create(user.user_id, defaults=defaults, email=user.email)
    return wizard.snapshot()


@router.get(
    "/{wizard_id}",
    summary="Get wizard state",
    response_model=WizardState,
    responses={
        200: {"description": "Current wizard state"},
        403: {"description": "Wizard belongs to another user"},
        404: {"description": "Wizard not found"},
    },
)
async def get_wizard(wizard: ListingWizard = Depends(get_owned_wizard)) -> WizardState:
    return wizard.snapshot()


@router.delete(
    "/{wizard_id}",
    summary="Discard a wizard",
    description="""
Discard the wizard and its draft.

Uploaded photos stay in storage; remove them first if they should go too.
""",
    response_model=SuccessMessage,
)
async def discard_wizard(
    wizard_id: str,
    user: UserSession = Depends(require_user),
    store: WizardStore = Depends(get_wizard_store),
) -> SuccessMessage:
    store.discard(wizard_id, user.user_id)
    return SuccessMessage(message="Listing draft discarded")


@router.patch(
    "/{wizard_id}/fields",
    summary="Write draft values",
    description="""
Write draft values into the listing form.

Values are stored as given and only checked when moving to the next step or
submitting. Errors already shown for the written fields are cleared.

**Notes:**
- `images`, `cover_image_index` and `availability` are managed by their own
  endpoints and cannot be written here
- Dimension values are in feet / square feet regardless of `unit_preference`
""",
    response_model=WizardState,
    responses={
        200: {"description": "Updated wizard state"},
        400: {"description": "Unknown field or unit system"},
    },
)
async def update_fields(
    body: FieldsUpdateRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> WizardState:
    wizard.update(**body.fields)
    return wizard.snapshot()


# === Navigation ===


@router.post(
    "/{wizard_id}/next",
    summary="Go to the next step",
    description="""
Validate the active step and advance when it passes.

When validation fails `moved` is false, `current_step` is unchanged and
`state.errors` maps each invalid field to its messages.
""",
    response_model=NavigationResponse,
)
async def next_step(wizard: ListingWizard = Depends(get_owned_wizard)) -> NavigationResponse:
    moved = wizard.next()
    return NavigationResponse(moved=moved, state=wizard.snapshot())


@router.post(
    "/{wizard_id}/previous",
    summary="Go to the previous step",
    response_model=NavigationResponse,
)
async def previous_step(
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> NavigationResponse:
    moved = wizard.previous()
    return NavigationResponse(moved=moved, state=wizard.snapshot())


@router.post(
    "/{wizard_id}/goto",
    summary="Jump to a step",
    description="""
Jump directly to a step without validation (used by the review summary).
""",
    response_model=NavigationResponse,
    responses={
        200: {"description": "Moved to the step"},
        400: {"description": "Step out of range"},
    },
)
async def go_to_step(
    body: GoToRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> NavigationResponse:
    if not wizard.go_to(body.step):
        raise ListingError(
            ErrorCode.INVALID_STEP,
            details={"step": str(body.step), "total_steps": str(wizard.total_steps)},
        )
    return NavigationResponse(moved=True, state=wizard.snapshot())


@router.post(
    "/{wizard_id}/submit",
    summary="Submit the listing",
    description="""
Validate the whole form and create the property.

**Status codes:**
- 201: Property created (`image_warning` is set if its photos could not be
  recorded; the property still exists)
- 400: Form invalid; `state.errors` lists the fields
- 502: The property could not be saved; the draft is kept so the
  submission can be retried

**Notes:**
- Submitting again after a success returns the same `property_id` without
  creating another property
- A submitted wizard closes and stays readable for a short retention window
""",
    response_model=SubmitResponse,
    status_code=HTTP_201_CREATED,
    responses={
        201: {"description": "Property created"},
        400: {"description": "Validation failed"},
        502: {"description": "Persistence failed"},
    },
)
async def submit_listing(
    response: Response,
    wizard: ListingWizard = Depends(get_owned_wizard),
    store: WizardStore = Depends(get_wizard_store),
) -> SubmitResponse:
    result = wizard.submit()
    store.complete(wizard)
    if not result.success:
        response.status_code = (
            HTTP_400_BAD_REQUEST
            if result.error_code is ErrorCode.VALIDATION_FAILED
            else HTTP_502_BAD_GATEWAY
        )
    return SubmitResponse(
        success=result.success,
        property_id=result.entity_id,
        message=wizard.message,
        image_warning=result.image_warning,
        state=wizard.snapshot(),
    )


# === Numeric inputs ===


def _input_response(wizard: ListingWizard, group: str, field: str, written: bool) -> NumericInputResponse:
    inputs = wizard.dimensions if group == "dimensions" else wizard.pricing
    return NumericInputResponse(
        field=field,
        written=written,
        display=inputs.display[field],
        value=getattr(wizard.form, field),
    )


@router.post(
    "/{wizard_id}/dimensions/unit",
    summary="Switch display units",
    description="""
Switch dimension display between metric and imperial.

Only the display strings change; stored values stay in feet / square feet.
""",
    response_model=WizardState,
)
async def set_unit_preference(
    body: UnitPreferenceRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> WizardState:
    wizard.dimensions.set_preference(body.unit_preference)
    return wizard.snapshot()


@router.post(
    "/{wizard_id}/dimensions/input",
    summary="Type into a dimension input",
    description="""
Send the full text of a dimension input after a keystroke.

The text is sanitized to digits and one decimal point. When it parses to a
non-negative number it is converted from the display unit and stored;
otherwise only the display string changes.
""",
    response_model=NumericInputResponse,
)
async def dimension_input(
    body: NumericInputRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> NumericInputResponse:
    written = wizard.input("dimensions", body.field, body.value)
    return _input_response(wizard, "dimensions", body.field, written)


@router.post(
    "/{wizard_id}/dimensions/blur",
    summary="Leave a dimension input",
    description="Reformat the display string from the stored value (2 decimals).",
    response_model=NumericInputResponse,
)
async def dimension_blur(
    body: BlurRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> NumericInputResponse:
    wizard.blur("dimensions", body.field)
    return _input_response(wizard, "dimensions", body.field, False)


@router.post(
    "/{wizard_id}/pricing/input",
    summary="Type into a pricing input",
    description="""
Send the full text of a pricing input after a keystroke.

Discount percentages are clamped to 100; amounts to 99,999,999.99.
""",
    response_model=NumericInputResponse,
)
async def pricing_input(
    body: NumericInputRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> NumericInputResponse:
    written = wizard.input("pricing", body.field, body.value)
    return _input_response(wizard, "pricing", body.field, written)


@router.post(
    "/{wizard_id}/pricing/blur",
    summary="Leave a pricing input",
    response_model=NumericInputResponse,
)
async def pricing_blur(
    body: BlurRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> NumericInputResponse:
    wizard.blur("pricing", body.field)
    return _input_response(wizard, "pricing", body.field, False)


# === Photos ===


@router.post(
    "/{wizard_id}/photos",
    summary="Upload photos",
    description="""
Upload one or more photos (multipart field `files`).

Each file is checked and uploaded on its own, in order:
- Only JPEG, PNG and WebP are accepted
- Files larger than 5MB are rejected

Rejected or failed files are listed in `errors`; the others are added to
the gallery. The first photo of an empty gallery becomes the cover.
""",
    response_model=UploadResponse,
)
async def upload_photos(
    files: list[UploadFile] = File(..., description="Image files"),
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> UploadResponse:
    photos = wizard.require_photos()
    incoming = [
        IncomingFile(
            filename=upload.filename or "upload",
            content_type=upload.content_type or "application/octet-stream",
            data=await upload.read(),
        )
        for upload in files
    ]
    result = photos.add_files(incoming)
    return UploadResponse(
        uploaded=result.uploaded,
        errors=result.errors,
        state=wizard.snapshot(),
    )


@router.delete(
    "/{wizard_id}/photos/{image_id}",
    summary="Remove a photo",
    description="""
Delete a photo from storage and the gallery.

If the cover is removed the first remaining photo becomes the cover. A
storage failure leaves the gallery unchanged and returns 502.
""",
    response_model=PhotoRemovalResponse,
    responses={
        200: {"description": "Photo removed"},
        404: {"description": "Image not found"},
        502: {"description": "Storage deletion failed"},
    },
)
async def remove_photo(
    image_id: str,
    response: Response,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> PhotoRemovalResponse:
    result = wizard.require_photos().remove_image(image_id)
    if not result.success:
        response.status_code = HTTP_502_BAD_GATEWAY
    return PhotoRemovalResponse(result=result, state=wizard.snapshot())


@router.post(
    "/{wizard_id}/photos/cover",
    summary="Choose the cover photo",
    response_model=WizardState,
    responses={
        200: {"description": "Cover updated"},
        400: {"description": "Index out of range"},
    },
)
async def set_cover_photo(
    body: CoverRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> WizardState:
    wizard.require_photos().set_cover(body.index)
    return wizard.snapshot()


@router.post(
    "/{wizard_id}/photos/reorder",
    summary="Move a photo",
    description="Move one photo to a new position; the cover follows its photo.",
    response_model=WizardState,
    responses={
        200: {"description": "Gallery reordered"},
        400: {"description": "Index out of range"},
    },
)
async def reorder_photos(
    body: ReorderRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> WizardState:
    wizard.require_photos().reorder(body.from_index, body.to_index)
    return wizard.snapshot()


# === Availability ===


@router.post(
    "/{wizard_id}/availability",
    summary="Edit availability",
    description="""
Apply a calendar action to the selected dates.

**Actions:**
- `block`: dates are unavailable
- `unblock`: dates are available
- `price`: dates are available at `special_price` (0 clears the price)

A later action on a date replaces the earlier one.
""",
    response_model=AvailabilityResponse,
)
async def edit_availability(
    body: AvailabilityRequest,
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> AvailabilityResponse:
    written = wizard.calendar.apply(body.dates, body.action, body.special_price)
    return AvailabilityResponse(written=written, state=wizard.snapshot())


@router.delete(
    "/{wizard_id}/availability",
    summary="Clear availability overrides",
    description="""
Remove the override for `date`, or every override when `date` is omitted
(which also makes dates available by default again).
""",
    response_model=WizardState,
)
async def clear_availability(
    date: dt.date | None = Query(default=None, description="Date to clear (YYYY-MM-DD)"),
    wizard: ListingWizard = Depends(get_owned_wizard),
) -> WizardState:
    if date is None:
        wizard.calendar.reset()
    else:
        wizard.calendar.remove(date)
    return wizard.snapshot()
