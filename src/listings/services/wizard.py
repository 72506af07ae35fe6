"""Listing wizard: step navigation and submission over one FormValue.

A wizard session owns one FormValue and the helpers that edit it (dimension
and pricing inputs, photo manager, availability calendar). Moving forward
runs the active step's validator; moving back or jumping never validates.
"""

import uuid
from typing import Any, Protocol

from listings.models import (
    ErrorCode,
    FormValue,
    ListingError,
    SubmissionResult,
    SubmissionStatus,
    UnitPreference,
    WizardState,
)
from listings.utils.logging import get_logger, log_listing_operation

from .auth_session import AuthSession
from .availability import AvailabilityCalendar
from .inputs import NumericFieldInputs, PricingInputs
from .photos import PhotoManager
from .storage import ObjectStorageService
from .units import DimensionInputs
from .validators import (
    STEP_NAMES,
    TOTAL_STEPS,
    first_invalid_step,
    validate_listing,
    validate_step,
)

logger = get_logger(__name__)

VALIDATION_MESSAGE = "Please fix the highlighted fields before submitting"
SUCCESS_MESSAGE = "Property created successfully"


class Submitter(Protocol):
    def submit(self, form: FormValue) -> SubmissionResult: ...


class ListingWizard:
    """State controller for one listing wizard session."""

    def __init__(
        self,
        submitter: Submitter,
        storage: ObjectStorageService | None = None,
        auth: AuthSession | None = None,
        form: FormValue | None = None,
        wizard_id: str | None = None,
    ) -> None:
        self.wizard_id = wizard_id or str(uuid.uuid4())
        self.form = form if form is not None else FormValue()
        self.auth = auth or AuthSession.anonymous()
        self.submitter = submitter

        self.current_step = 0
        self.errors: dict[str, list[str]] = {}
        self.status = SubmissionStatus.IDLE
        self.message: str | None = None
        self.entity_id: str | None = None
        self.result: SubmissionResult | None = None

        self.dimensions = DimensionInputs(self.form)
        self.pricing = PricingInputs(self.form)
        self.calendar = AvailabilityCalendar(self.form)
        self.photos = (
            PhotoManager(self.form, storage, self.auth, wizard_id=self.wizard_id)
            if storage is not None
            else None
        )

    # Navigation state

    @property
    def owner_id(self) -> str | None:
        return self.auth.get_user_id()

    @property
    def total_steps(self) -> int:
        return TOTAL_STEPS

    @property
    def step_name(self) -> str:
        return STEP_NAMES[self.current_step]

    @property
    def is_first_step(self) -> bool:
        return self.current_step == 0

    @property
    def is_last_step(self) -> bool:
        return self.current_step == TOTAL_STEPS - 1

    # Editing

    def update(self, **fields: Any) -> None:
        """Write draft values into the form.

        Values are not validated here; the owning step's validator reports
        them on ``next()``. Errors for the written fields are cleared.

        Raises:
            ListingError: UNKNOWN_FIELD if any name is not an editable field,
                VALIDATION_FAILED for an unknown unit system (nothing is
                written in either case)
        """
        editable = FormValue.editable_fields()
        unknown = sorted(name for name in fields if name not in editable)
        if unknown:
            raise ListingError(ErrorCode.UNKNOWN_FIELD, details={"fields": ", ".join(unknown)})

        if "unit_preference" in fields:
            try:
                fields["unit_preference"] = UnitPreference(fields["unit_preference"])
            except ValueError as e:
                raise ListingError(
                    ErrorCode.VALIDATION_FAILED,
                    details={"unit_preference": "Must be 'metric' or 'imperial'"},
                ) from e

        for name, value in fields.items():
            if name == "unit_preference":
                self.dimensions.set_preference(value)
            elif name == "default_availability":
                self.calendar.set_default(value)
            else:
                setattr(self.form, name, value)
            self.errors.pop(name, None)

        self.dimensions.refresh()
        self.pricing.refresh()

    def _inputs(self, group: str) -> NumericFieldInputs:
        if group == "dimensions":
            return self.dimensions
        if group == "pricing":
            return self.pricing
        raise ValueError(f"Unknown input group: {group}")

    def input(self, group: str, field: str, raw: str) -> bool:
        """Keystroke in a dimension or pricing input.

        Returns:
            True if the form value was written

        Raises:
            ListingError: UNKNOWN_FIELD if the field is not in the group
        """
        try:
            written = self._inputs(group).input(field, raw)
        except KeyError as e:
            raise ListingError(ErrorCode.UNKNOWN_FIELD, details={"field": field}) from e
        if written:
            self.errors.pop(field, None)
        return written

    def blur(self, group: str, field: str) -> str:
        try:
            return self._inputs(group).blur(field)
        except KeyError as e:
            raise ListingError(ErrorCode.UNKNOWN_FIELD, details={"field": field}) from e

    def require_photos(self) -> PhotoManager:
        if self.photos is None:
            raise ListingError(ErrorCode.UPLOAD_FAILED, details={"reason": "storage not configured"})
        return self.photos

    # Navigation

    def next(self) -> bool:
        """Validate the active step and advance if it passes.

        Returns:
            True if the step advanced. False leaves ``current_step`` as is;
            ``errors`` then holds the step's field messages (or is empty on
            the last step, which has nowhere to advance to).
        """
        errors = validate_step(self.current_step, self.form)
        if errors:
            self.errors = errors
            log_listing_operation(
                logger,
                "step_blocked",
                wizard_id=self.wizard_id,
                step=self.step_name,
                fields=",".join(sorted(errors)),
            )
            return False

        self.errors = {}
        if self.is_last_step:
            return False
        self.current_step += 1
        return True

    def previous(self) -> bool:
        if self.is_first_step:
            return False
        self.current_step -= 1
        self.errors = {}
        return True

    def go_to(self, step: int) -> bool:
        """Jump to any step in range without validating."""
        if not 0 <= step < TOTAL_STEPS:
            return False
        self.current_step = step
        self.errors = {}
        return True

    # Submission

    def submit(self) -> SubmissionResult:
        """Validate the whole form and hand it to the submitter.

        The form is kept intact whatever the outcome, so a failed submission
        can be retried. Once a submission has succeeded, later calls return
        the same result without creating another property.
        """
        if self.status is SubmissionStatus.SUCCESS and self.result is not None:
            log_listing_operation(
                logger, "submit_repeated", wizard_id=self.wizard_id, property_id=self.entity_id
            )
            return self.result

        errors = validate_listing(self.form)
        if errors:
            self.errors = errors
            invalid_step = first_invalid_step(errors)
            if invalid_step is not None:
                self.current_step = invalid_step
            self.status = SubmissionStatus.ERROR
            self.message = VALIDATION_MESSAGE
            return SubmissionResult(
                success=False,
                error=VALIDATION_MESSAGE,
                error_code=ErrorCode.VALIDATION_FAILED,
            )

        self.errors = {}
        result = self.submitter.submit(self.form)
        if result.success:
            self.status = SubmissionStatus.SUCCESS
            self.entity_id = result.entity_id
            self.result = result
            self.message = result.image_warning or SUCCESS_MESSAGE
        else:
            self.status = SubmissionStatus.ERROR
            self.message = result.error

        log_listing_operation(
            logger,
            "submit",
            wizard_id=self.wizard_id,
            property_id=self.entity_id,
            user_id=self.owner_id,
            error=None if result.success else result.error,
        )
        return result

    def snapshot(self) -> WizardState:
        return WizardState(
            wizard_id=self.wizard_id,
            current_step=self.current_step,
            step_name=self.step_name,
            total_steps=self.total_steps,
            is_first_step=self.is_first_step,
            is_last_step=self.is_last_step,
            errors=self.errors,
            status=self.status,
            message=self.message,
            entity_id=self.entity_id,
            form=self.form,
            display_values={**self.dimensions.display, **self.pricing.display},
            unit_labels=self.dimensions.labels,
        )
