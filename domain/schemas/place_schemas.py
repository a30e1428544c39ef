from pydantic import BaseModel, Field
from typing import Optional, Tuple
from decimal import Decimal, InvalidOperation

from domain.enums import FoodCategory, LocationStatus, SessionEvent


class Coordinate(BaseModel):
    """WGS84 point"""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    model_config = {"frozen": True}


class Place(BaseModel):
    """
    A place returned by a nearby search. Lives for one search response and is
    never persisted.
    """

    id: str
    name: str
    category_name: Optional[str] = None
    road_address: Optional[str] = None
    address: Optional[str] = None
    distance: str = Field(
        default="", description="Distance from the search origin in meters, as sent"
    )
    coordinate: Coordinate
    place_url: Optional[str] = None
    phone: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def distance_m(self) -> Optional[Decimal]:
        """Parsed distance; None when the server sent nothing usable"""
        raw = (self.distance or "").strip()
        if not raw:
            return None
        try:
            value = Decimal(raw)
        except InvalidOperation:
            return None
        if not value.is_finite() or value < 0:
            return None
        return value


class Region(BaseModel):
    """Map viewport"""

    center: Coordinate
    latitude_delta: float = Field(..., gt=0)
    longitude_delta: float = Field(..., gt=0)

    model_config = {"frozen": True}


class PlaceInfo(BaseModel):
    """Resolved strings for the place info panel"""

    name: str
    category: str
    address: str
    distance: str

    model_config = {"frozen": True}


class SessionSnapshot(BaseModel):
    """Immutable state of a LocationSession, published on every transition"""

    event: Optional[SessionEvent] = None
    status: LocationStatus
    coordinate: Optional[Coordinate] = None
    category: FoodCategory
    places: Tuple[Place, ...] = ()
    sequence: int = 0
    first_fix: bool = False
    error: Optional[str] = None

    model_config = {"frozen": True}


class MapSnapshot(BaseModel):
    """Immutable view-facing map state"""

    status: LocationStatus
    coordinate: Optional[Coordinate] = None
    category: FoodCategory
    places: Tuple[Place, ...] = ()
    nearest: Optional[Place] = None
    selected: Optional[Place] = None
    viewport: Optional[Region] = None
    info: PlaceInfo
    summary: str
    error: Optional[str] = None

    model_config = {"frozen": True}


class LocationReport(BaseModel):
    """Schema for a device location fix reported by the app"""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class CategoryUpdate(BaseModel):
    """Schema for switching the search category"""

    category: FoodCategory


class CategoryResponse(BaseModel):
    """A selectable search category"""

    value: FoodCategory
    label: str
    keyword: str
