"""Submission adapter: turns a validated FormValue into persisted records.

The property record is written first. Image rows are a second batch write
keyed by the new property_id; if that write fails the property stays created
and the result carries an ``image_warning``.
"""

import math
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from listings.models import (
    DIMENSION_FIELDS,
    MAX_NUMERIC_VALUE,
    ErrorCode,
    FormValue,
    ListingError,
    PropertyStatus,
    SubmissionResult,
)
from listings.utils.logging import get_logger, log_listing_operation

from .auth_session import AuthSession
from .dynamodb import DynamoDBService
from .storage import aws_error_code

logger = get_logger(__name__)

MONEY_FIELDS = (
    "price_per_hour",
    "price_per_day",
    "discount_weekly",
    "discount_monthly",
)
INTEGER_FIELDS = ("max_guests", "bedrooms", "bathrooms", "minimum_hours")
COORDINATE_FIELDS = ("latitude", "longitude")

IMAGE_WARNING = "Property saved, but its photos could not be recorded"


def sanitize_numeric_field(value: Any, field: str, places: int = 2) -> Decimal | None:
    """Harden a numeric value for a fixed-precision column.

    Args:
        value: Raw form value (number, numeric string, or anything else)
        field: Field name, for the log line
        places: Decimal places kept

    Returns:
        The value as a Decimal with magnitude capped at MAX_NUMERIC_VALUE,
        or None when the value is missing or not numeric.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        logger.warning("Invalid numeric value for %s: %r", field, value)
        return None

    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid numeric value for %s: %r", field, value)
        return None

    if math.isnan(number):
        logger.warning("Invalid numeric value for %s: %r", field, value)
        return None

    if abs(number) >= MAX_NUMERIC_VALUE:
        logger.warning(
            "Value too large for %s: %s, capping at %s", field, number, MAX_NUMERIC_VALUE
        )
        number = MAX_NUMERIC_VALUE if number > 0 else -MAX_NUMERIC_VALUE

    return Decimal(f"{number:.{places}f}")


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def build_property_record(
    form: FormValue,
    owner_id: str,
    property_id: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Serialize a form into a ``properties`` table item.

    New properties are drafts and unpublished. Every numeric value goes
    through sanitize_numeric_field.
    """
    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    record: dict[str, Any] = {
        "property_id": property_id or str(uuid.uuid4()),
        "owner_id": owner_id,
        "name": form.name,
        "title": form.name,
        "property_type": _enum_value(form.property_type),
        "description": form.description,
        "address_line1": form.address_line1,
        "address_line2": form.address_line2 or None,
        "city": form.city,
        "state": form.state,
        "postal_code": form.postal_code,
        "country": form.country,
        "unit_preference": _enum_value(form.unit_preference),
        "amenities": [_enum_value(tag) for tag in form.amenities],
        "nearby_facilities": [_enum_value(tag) for tag in form.nearby_facilities],
        "additional_info": form.additional_info or None,
        "rules": form.rules or None,
        "cancellation_policy": _enum_value(form.cancellation_policy),
        "noise_restrictions": bool(form.noise_restrictions),
        "no_smoking": bool(form.no_smoking),
        "no_pets": bool(form.no_pets),
        "no_parties": bool(form.no_parties),
        "default_availability": bool(form.default_availability),
        "availability": [
            {
                "date": override.date.isoformat(),
                "is_available": override.is_available,
                "special_price": sanitize_numeric_field(override.special_price, "special_price"),
            }
            for override in form.availability
        ],
        "status": PropertyStatus.DRAFT.value,
        "is_published": False,
        "created_at": timestamp,
        "updated_at": timestamp,
    }

    for field in COORDINATE_FIELDS:
        record[field] = sanitize_numeric_field(getattr(form, field), field, places=6)
    for field in (*DIMENSION_FIELDS, *MONEY_FIELDS):
        record[field] = sanitize_numeric_field(getattr(form, field), field)
    for field in INTEGER_FIELDS:
        record[field] = sanitize_numeric_field(getattr(form, field), field, places=0)

    if record["minimum_hours"] is None:
        record["minimum_hours"] = Decimal(1)
    for field in ("discount_weekly", "discount_monthly"):
        if record[field] is None:
            record[field] = Decimal(0)

    return record


def build_image_records(
    form: FormValue,
    property_id: str,
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    """Serialize the gallery into ``property-images`` items, one per position."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    cover = form.cover_image_index or 0
    return [
        {
            "property_id": property_id,
            "position": index,
            "image_id": image.id,
            "path": image.storage_path,
            "url": image.public_url,
            "name": image.display_name,
            "size": image.byte_size,
            "type": image.mime_type,
            "is_cover": index == cover,
            "created_at": timestamp,
        }
        for index, image in enumerate(form.images)
    ]


class SubmissionAdapter:
    """Persists a listing for the signed-in user."""

    def __init__(self, db: DynamoDBService, auth: AuthSession) -> None:
        self.db = db
        self.auth = auth

    def submit(self, form: FormValue) -> SubmissionResult:
        """Create the property and its image rows.

        Failures are returned, not raised; ``form`` is never modified.

        Returns:
            SubmissionResult with the stored record on success, or the
            error message and code on failure.
        """
        try:
            owner_id = self.auth.require_session().user_id
        except ListingError as e:
            return SubmissionResult(success=False, error=e.message, error_code=e.code)

        record = build_property_record(form, owner_id)
        property_id = record["property_id"]

        try:
            created = self.db.create_property(record)
        except (ClientError, BotoCoreError) as e:
            error_code = aws_error_code(e)
            log_listing_operation(
                logger, "create_property", user_id=owner_id, error=error_code
            )
            return SubmissionResult(
                success=False,
                error=f"Failed to create property: {error_code}",
                error_code=ErrorCode.PERSISTENCE_FAILED,
            )

        if not created:
            log_listing_operation(
                logger, "create_property", user_id=owner_id, error="duplicate property_id"
            )
            return SubmissionResult(
                success=False,
                error="Failed to create property: duplicate id",
                error_code=ErrorCode.PERSISTENCE_FAILED,
            )

        image_warning = None
        images = build_image_records(form, property_id)
        if images:
            try:
                self.db.insert_property_images(images)
            except (ClientError, BotoCoreError) as e:
                error_code = aws_error_code(e)
                log_listing_operation(
                    logger,
                    "insert_property_images",
                    property_id=property_id,
                    error=error_code,
                )
                image_warning = IMAGE_WARNING

        log_listing_operation(
            logger,
            "create_property",
            property_id=property_id,
            user_id=owner_id,
            images=len(images),
        )
        return SubmissionResult(success=True, entity=record, image_warning=image_warning)
