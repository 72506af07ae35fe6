"""API models for the property dashboard endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from listings.models import Property, PropertyStatus


class PropertyListResponse(BaseModel):
    """The caller's properties, newest first."""

    model_config = ConfigDict(strict=False)

    properties: list[Property]
    total_count: int = Field(..., ge=0)


class StatusUpdateRequest(BaseModel):
    # Lax so the enum is accepted from its JSON string
    model_config = ConfigDict(strict=False)

    status: PropertyStatus = Field(..., examples=["active"])
