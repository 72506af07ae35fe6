"""Persisted property models, read back from DynamoDB items."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import PropertyStatus


class PropertyImage(BaseModel):
    """A stored image row of a property."""

    # Lax: DynamoDB returns numbers as Decimal
    model_config = ConfigDict(strict=False, extra="ignore")

    property_id: str
    position: int
    image_id: Optional[str] = None
    path: str
    url: str
    name: Optional[str] = None
    size: Optional[int] = None
    type: Optional[str] = None
    is_cover: bool = False


class AvailabilityEntry(BaseModel):
    """A stored availability override."""

    model_config = ConfigDict(strict=False, extra="ignore")

    date: str
    is_available: bool
    special_price: Optional[float] = None


class Property(BaseModel):
    """A persisted listing."""

    model_config = ConfigDict(strict=False, extra="ignore")

    property_id: str
    owner_id: str
    name: str
    property_type: str
    description: str = ""
    status: PropertyStatus = PropertyStatus.DRAFT
    is_published: bool = False

    address_line1: str = ""
    address_line2: Optional[str] = None
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    size_sqft: Optional[float] = None
    length_ft: Optional[float] = None
    width_ft: Optional[float] = None
    ceiling_height_ft: Optional[float] = None
    unit_preference: str = "metric"

    max_guests: Optional[int] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    amenities: list[str] = Field(default_factory=list)
    nearby_facilities: list[str] = Field(default_factory=list)
    additional_info: Optional[str] = None

    price_per_hour: Optional[float] = None
    price_per_day: Optional[float] = None
    minimum_hours: Optional[int] = None
    discount_weekly: Optional[float] = None
    discount_monthly: Optional[float] = None

    rules: Optional[str] = None
    cancellation_policy: Optional[str] = None
    noise_restrictions: bool = False
    no_smoking: bool = False
    no_pets: bool = False
    no_parties: bool = False

    default_availability: bool = True
    availability: list[AvailabilityEntry] = Field(default_factory=list)

    created_at: str
    updated_at: str

    images: list[PropertyImage] = Field(default_factory=list)

    @property
    def cover_image(self) -> Optional[PropertyImage]:
        for image in self.images:
            if image.is_cover:
                return image
        return self.images[0] if self.images else None
