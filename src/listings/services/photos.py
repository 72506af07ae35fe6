"""Photo manager for a listing draft.

Owns ``images`` and ``cover_image_index`` of one FormValue. Storage calls are
made one file at a time in input order; a failed file or removal is reported
in the result and never changes the form for that item.
"""

import uuid
from collections.abc import Iterable
from pathlib import PurePosixPath

from listings.models import (
    ErrorCode,
    FileError,
    FormValue,
    ImageRecord,
    IncomingFile,
    ListingError,
    PhotoOperationResult,
    UploadBatchResult,
)
from listings.utils.logging import get_logger, log_listing_operation

from .auth_session import AuthSession
from .storage import ObjectStorageService

logger = get_logger(__name__)

MAX_FILE_SIZE = 5 * 1024 * 1024

ALLOWED_MIME_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def storage_path(user_id: str, filename: str, mime_type: str) -> str:
    """Object key for a new upload: ``properties/{user_id}/{uuid}.{ext}``."""
    ext = PurePosixPath(filename).suffix.lstrip(".").lower() or ALLOWED_MIME_TYPES[mime_type]
    return f"properties/{user_id}/{uuid.uuid4()}.{ext}"


def check_file(file: IncomingFile) -> str | None:
    """Return the rejection message for a file, or None if it may be uploaded."""
    if file.content_type not in ALLOWED_MIME_TYPES:
        return "Unsupported file type. Use JPEG, PNG or WebP images"
    if file.size > MAX_FILE_SIZE:
        return "File exceeds the maximum size of 5MB"
    return None


class PhotoManager:
    """Uploads, removes, orders and picks the cover of listing photos."""

    def __init__(
        self,
        form: FormValue,
        storage: ObjectStorageService,
        auth: AuthSession,
        wizard_id: str | None = None,
    ) -> None:
        self.form = form
        self.storage = storage
        self.auth = auth
        self.wizard_id = wizard_id

    @property
    def images(self) -> list[ImageRecord]:
        return self.form.images

    def _index_of(self, image_id: str) -> int:
        for index, image in enumerate(self.form.images):
            if image.id == image_id:
                return index
        raise ListingError(ErrorCode.IMAGE_NOT_FOUND, details={"image_id": image_id})

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.form.images):
            raise ListingError(
                ErrorCode.INVALID_IMAGE_INDEX,
                details={"index": str(index), "count": str(len(self.form.images))},
            )

    def add_files(self, files: Iterable[IncomingFile]) -> UploadBatchResult:
        """Validate and upload a batch of files.

        Each file is checked for type and size, then uploaded under the
        signed-in user's folder. Accepted files are appended in input order;
        rejected or failed files are reported in ``errors``. The first image
        added to an empty gallery becomes the cover.

        Raises:
            ListingError: AUTH_REQUIRED when no user is signed in
        """
        user_id = self.auth.require_session().user_id
        result = UploadBatchResult()

        for file in files:
            rejection = check_file(file)
            if rejection:
                result.errors.append(FileError(filename=file.filename, message=rejection))
                continue

            path = storage_path(user_id, file.filename, file.content_type)
            stored = self.storage.upload(path, file.data, file.content_type)
            if not stored.ok:
                result.errors.append(
                    FileError(filename=file.filename, message=stored.error or "Upload failed")
                )
                continue

            record = ImageRecord(
                id=str(uuid.uuid4()),
                storage_path=path,
                public_url=self.storage.get_public_url(path),
                display_name=file.filename,
                byte_size=file.size,
                mime_type=file.content_type,
            )
            self.form.images.append(record)
            result.uploaded.append(record)

        if result.uploaded and self.form.cover_image_index is None:
            self.form.cover_image_index = 0

        log_listing_operation(
            logger,
            "add_photos",
            wizard_id=self.wizard_id,
            user_id=user_id,
            uploaded=len(result.uploaded),
            rejected=len(result.errors),
        )
        return result

    def remove_image(self, image_id: str) -> PhotoOperationResult:
        """Delete an image from storage and from the gallery.

        Cover repair: removing the cover points it at the first remaining
        image (or clears it); removing an earlier image shifts it down.

        Raises:
            ListingError: IMAGE_NOT_FOUND for an unknown id
        """
        index = self._index_of(image_id)
        image = self.form.images[index]

        removed = self.storage.remove([image.storage_path])
        if not removed.ok:
            log_listing_operation(
                logger,
                "remove_photo",
                wizard_id=self.wizard_id,
                error=removed.error,
                image_id=image_id,
            )
            return PhotoOperationResult(image_id=image_id, success=False, error=removed.error)

        del self.form.images[index]

        cover = self.form.cover_image_index
        if cover == index:
            self.form.cover_image_index = 0 if self.form.images else None
        elif cover is not None and cover > index:
            self.form.cover_image_index = cover - 1

        log_listing_operation(logger, "remove_photo", wizard_id=self.wizard_id, image_id=image_id)
        return PhotoOperationResult(image_id=image_id, success=True)

    def remove_images(self, image_ids: Iterable[str]) -> list[PhotoOperationResult]:
        """Remove several images; each id succeeds or fails on its own."""
        results = []
        for image_id in image_ids:
            try:
                results.append(self.remove_image(image_id))
            except ListingError as e:
                results.append(
                    PhotoOperationResult(image_id=image_id, success=False, error=e.message)
                )
        return results

    def set_cover(self, index: int) -> None:
        self._check_index(index)
        self.form.cover_image_index = index

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move the image at ``from_index`` to ``to_index``.

        The cover index follows the image it pointed at.
        """
        self._check_index(from_index)
        self._check_index(to_index)
        if from_index == to_index:
            return

        images = self.form.images
        cover = self.form.cover_image_index
        cover_id = images[cover].id if cover is not None and cover < len(images) else None

        moved = images.pop(from_index)
        images.insert(to_index, moved)

        if cover_id is not None:
            self.form.cover_image_index = next(
                i for i, image in enumerate(images) if image.id == cover_id
            )
