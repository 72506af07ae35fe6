"""Result and state models produced by the listing wizard services."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import SubmissionStatus
from .errors import ErrorCode
from .listing import FormValue, ImageRecord


class FileError(BaseModel):
    """A file in an upload batch that was not added."""

    model_config = ConfigDict(strict=True)

    filename: str
    message: str


class UploadBatchResult(BaseModel):
    """Outcome of PhotoManager.add_files.

    A batch is never atomic: every file is tried, and accepted files are
    appended even when others in the same batch fail.
    """

    model_config = ConfigDict(strict=True)

    uploaded: list[ImageRecord] = Field(default_factory=list)
    errors: list[FileError] = Field(default_factory=list)


class PhotoOperationResult(BaseModel):
    """Outcome of removing a single image."""

    model_config = ConfigDict(strict=True)

    image_id: str
    success: bool
    error: str | None = None


class SubmissionResult(BaseModel):
    """Outcome of submitting a listing for persistence."""

    model_config = ConfigDict(strict=False)

    success: bool
    entity: dict[str, Any] | None = None
    error: str | None = None
    error_code: ErrorCode | None = None
    # Set when the property was created but its image rows were not
    image_warning: str | None = None

    @property
    def entity_id(self) -> str | None:
        if not self.entity:
            return None
        return self.entity.get("property_id")


class WizardState(BaseModel):
    """Serializable view of a wizard session."""

    model_config = ConfigDict(strict=False)

    wizard_id: str
    current_step: int
    step_name: str
    total_steps: int
    is_first_step: bool
    is_last_step: bool
    errors: dict[str, list[str]] = Field(default_factory=dict)
    status: SubmissionStatus = SubmissionStatus.IDLE
    message: str | None = None
    entity_id: str | None = None
    form: FormValue
    display_values: dict[str, str] = Field(default_factory=dict)
    unit_labels: dict[str, str] = Field(default_factory=dict)


class IncomingFile(BaseModel):
    """A file selected for upload, as received from the client."""

    model_config = ConfigDict(strict=True)

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
