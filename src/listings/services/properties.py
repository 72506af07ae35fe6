"""Owner dashboard operations on persisted properties."""

from datetime import datetime, timezone

from listings.models import ErrorCode, ListingError, Property, PropertyImage, PropertyStatus
from listings.utils.logging import get_logger, log_listing_operation

from .dynamodb import DynamoDBService
from .storage import ObjectStorageService

logger = get_logger(__name__)


class PropertyService:
    """Lists, reads, updates and deletes an owner's properties."""

    def __init__(self, db: DynamoDBService, storage: ObjectStorageService) -> None:
        self.db = db
        self.storage = storage

    def _load(self, property_id: str) -> dict:
        item = self.db.get_property(property_id)
        if item is None:
            raise ListingError(
                ErrorCode.PROPERTY_NOT_FOUND, details={"property_id": property_id}
            )
        return item

    def _load_owned(self, property_id: str, user_id: str) -> dict:
        item = self._load(property_id)
        if item.get("owner_id") != user_id:
            log_listing_operation(
                logger,
                "ownership_check",
                property_id=property_id,
                user_id=user_id,
                error="not the owner",
            )
            raise ListingError(ErrorCode.FORBIDDEN, details={"property_id": property_id})
        return item

    def list_for_owner(
        self,
        owner_id: str,
        status: PropertyStatus | str | None = None,
        search: str | None = None,
    ) -> list[Property]:
        """List an owner's properties, newest first.

        Args:
            owner_id: Owner's user ID
            status: Only properties with this status
            search: Case-insensitive match on name or city

        Returns:
            Matching properties (without image rows)
        """
        wanted = PropertyStatus(status) if status else None
        needle = search.strip().lower() if search else ""

        properties = []
        for item in self.db.list_properties_by_owner(owner_id):
            prop = Property.model_validate(item)
            if wanted is not None and prop.status is not wanted:
                continue
            if needle and needle not in prop.name.lower() and needle not in prop.city.lower():
                continue
            properties.append(prop)
        return properties

    def get_property(self, property_id: str) -> Property:
        """Get a property with its images in gallery order.

        Raises:
            ListingError: PROPERTY_NOT_FOUND
        """
        item = self._load(property_id)
        rows = sorted(self.db.get_property_images(property_id), key=lambda r: r["position"])
        prop = Property.model_validate(item)
        prop.images = [PropertyImage.model_validate(row) for row in rows]
        return prop

    def update_status(
        self,
        property_id: str,
        user_id: str,
        status: PropertyStatus | str,
    ) -> Property:
        """Change a property's status.

        Raises:
            ListingError: PROPERTY_NOT_FOUND, or FORBIDDEN if ``user_id``
                is not the owner
        """
        new_status = PropertyStatus(status)
        self._load_owned(property_id, user_id)

        updated = self.db.update_property(
            property_id,
            {
                "status": new_status.value,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        if updated is None:
            # Deleted between the ownership check and the update
            raise ListingError(
                ErrorCode.PROPERTY_NOT_FOUND, details={"property_id": property_id}
            )

        log_listing_operation(
            logger,
            "update_status",
            property_id=property_id,
            user_id=user_id,
            status=new_status.value,
        )
        return Property.model_validate(updated)

    def delete_property(self, property_id: str, user_id: str) -> None:
        """Delete a property, its image rows and its stored photos.

        A storage failure is logged; the records are deleted regardless.

        Raises:
            ListingError: PROPERTY_NOT_FOUND, or FORBIDDEN if ``user_id``
                is not the owner
        """
        self._load_owned(property_id, user_id)

        rows = self.db.delete_property_images(property_id)
        paths = [row["path"] for row in rows if row.get("path")]
        removed = self.storage.remove(paths)
        if not removed.ok:
            log_listing_operation(
                logger,
                "remove_property_photos",
                property_id=property_id,
                error=removed.error,
            )

        self.db.delete_property(property_id)
        log_listing_operation(
            logger,
            "delete_property",
            property_id=property_id,
            user_id=user_id,
            images=len(rows),
        )
