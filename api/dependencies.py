"""
API dependencies for dependency injection.

Components are constructed once in the application lifespan and kept on
app.state; routes receive them through these providers.
"""

from fastapi import Request

from adapters.location import ReportedLocationProvider
from repositories.favorites_repository import FavoritesRepository
from services.location_session import LocationSession
from services.map_controller import MapInteractionController


def get_favorites(request: Request) -> FavoritesRepository:
    """
    Favorites repository dependency.

    Usage:
        @router.get("/example")
        async def example(favorites: FavoritesRepository = Depends(get_favorites)):
            ...
    """
    return request.app.state.favorites


def get_location_provider(request: Request) -> ReportedLocationProvider:
    return request.app.state.location_provider


def get_location_session(request: Request) -> LocationSession:
    return request.app.state.location_session


def get_map_controller(request: Request) -> MapInteractionController:
    return request.app.state.map_controller
