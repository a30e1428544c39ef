"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.restaurant_schemas import (
    MenuCreate,
    RestaurantCreate,
    RestaurantRename,
    MenuResponse,
    RestaurantResponse,
    FavoritesSnapshot,
)
from domain.schemas.place_schemas import (
    Coordinate,
    Place,
    Region,
    PlaceInfo,
    SessionSnapshot,
    MapSnapshot,
    LocationReport,
    CategoryUpdate,
    CategoryResponse,
)

__all__ = [
    # Favorites schemas
    "MenuCreate",
    "RestaurantCreate",
    "RestaurantRename",
    "MenuResponse",
    "RestaurantResponse",
    "FavoritesSnapshot",
    # Place and map schemas
    "Coordinate",
    "Place",
    "Region",
    "PlaceInfo",
    "SessionSnapshot",
    "MapSnapshot",
    "LocationReport",
    "CategoryUpdate",
    "CategoryResponse",
]
