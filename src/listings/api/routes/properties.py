"""Property dashboard endpoints.

Provides REST endpoints for:
- Listing the caller's properties with status and text filters (JWT required)
- Getting a property with its photos (public)
- Changing a property's status (JWT required, owner only)
- Deleting a property (JWT required, owner only)
"""

from fastapi import APIRouter, Depends, Query

from listings.api.dependencies import get_property_service, require_user
from listings.api.models.common import SuccessMessage
from listings.api.models.properties import PropertyListResponse, StatusUpdateRequest
from listings.models import Property, PropertyStatus, UserSession
from listings.services.properties import PropertyService

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get(
    "/mine",
    summary="List my properties",
    description="""
List the caller's properties, newest first.

**Requires JWT authentication.**

**Query Parameters:**
- `status`: Only properties with this status (draft, active, inactive)
- `search`: Case-insensitive match on name or city
""",
    response_description="The caller's properties",
    response_model=PropertyListResponse,
    responses={
        200: {"description": "Properties retrieved"},
        401: {"description": "Authentication required"},
    },
)
async def list_my_properties(
    status: PropertyStatus | None = Query(default=None, description="Filter by status"),
    search: str | None = Query(default=None, max_length=100, description="Search text"),
    user: UserSession = Depends(require_user),
    service: PropertyService = Depends(get_property_service),
) -> PropertyListResponse:
    properties = service.list_for_owner(user.user_id, status=status, search=search)
    return PropertyListResponse(properties=properties, total_count=len(properties))


@router.get(
    "/{property_id}",
    summary="Get property details",
    description="""
Get a property with its photos in gallery order.

**Public endpoint** - no authentication required.
""",
    response_model=Property,
    responses={
        200: {"description": "Property details"},
        404: {"description": "Property not found"},
    },
)
async def get_property(
    property_id: str,
    service: PropertyService = Depends(get_property_service),
) -> Property:
    return service.get_property(property_id)


@router.patch(
    "/{property_id}/status",
    summary="Change property status",
    description="""
Set a property's status (draft, active or inactive).

**Requires JWT authentication. Owner only.**
""",
    response_model=Property,
    responses={
        200: {"description": "Status updated"},
        401: {"description": "Authentication required"},
        403: {"description": "Not the owner"},
        404: {"description": "Property not found"},
    },
)
async def update_property_status(
    property_id: str,
    body: StatusUpdateRequest,
    user: UserSession = Depends(require_user),
    service: PropertyService = Depends(get_property_service),
) -> Property:
    return service.update_status(property_id, user.user_id, body.status)


@router.delete(
    "/{property_id}",
    summary="Delete a property",
    description="""
Delete a property, its photo records and its stored photos.

**Requires JWT authentication. Owner only.** This cannot be undone.
""",
    response_model=SuccessMessage,
    responses={
        200: {"description": "Property deleted"},
        401: {"description": "Authentication required"},
        403: {"description": "Not the owner"},
        404: {"description": "Property not found"},
    },
)
async def delete_property(
    property_id: str,
    user: UserSession = Depends(require_user),
    service: PropertyService = Depends(get_property_service),
) -> SuccessMessage:
    service.delete_property(property_id, user.user_id)
    return SuccessMessage(message="Property deleted")
