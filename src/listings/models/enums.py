"""Enumeration types for listing data models."""

from enum import Enum


class PropertyType(str, Enum):
    """Category of a listed property."""

    HOUSE = "house"
    APARTMENT = "apartment"
    STUDIO = "studio"
    LOFT = "loft"
    WAREHOUSE = "warehouse"
    OFFICE = "office"
    RETAIL = "retail"
    OUTDOOR = "outdoor"
    GARDEN = "garden"
    OTHER = "other"


class Amenity(str, Enum):
    """Amenities offered on site."""

    PARKING = "parking"
    WIFI = "wifi"
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    FURNITURE = "furniture"
    HEATING = "heating"
    AIR_CONDITIONING = "air_conditioning"
    NATURAL_LIGHT = "natural_light"
    BLACKOUT = "blackout"
    POWER_OUTLETS = "power_outlets"
    LOADING_AREA = "loading_area"
    SOUND_SYSTEM = "sound_system"
    GREEN_SCREEN = "green_screen"


class NearbyFacility(str, Enum):
    """Facilities close to the property."""

    RESTAURANTS = "restaurants"
    CAFES = "cafes"
    PUBLIC_TRANSPORT = "public_transport"
    PARKING = "parking"
    SHOPS = "shops"
    PARKS = "parks"
    HOSPITALS = "hospitals"
    SCHOOLS = "schools"


class CancellationPolicy(str, Enum):
    """Cancellation policy offered to renters."""

    FLEXIBLE = "flexible"
    MODERATE = "moderate"
    STRICT = "strict"


class UnitPreference(str, Enum):
    """Display unit system for dimension fields."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class PropertyStatus(str, Enum):
    """Publication status of a persisted property."""

    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"


class SubmissionStatus(str, Enum):
    """Status of the wizard's final submission."""

    IDLE = "idle"
    SUCCESS = "success"
    ERROR = "error"


class AvailabilityAction(str, Enum):
    """Action applied to selected calendar dates."""

    BLOCK = "block"
    UNBLOCK = "unblock"
    PRICE = "price"
