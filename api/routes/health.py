"""Health check routes"""

from fastapi import APIRouter, Depends, Request
import logging

from api.dependencies import get_favorites
from api.responses import HealthResponse
from repositories.favorites_repository import FavoritesRepository

router = APIRouter(tags=["Health"])
logger = logging.getLogger("besteats.api.health")


@router.get("/health-check", response_model=HealthResponse)
async def health_check(
    request: Request, favorites: FavoritesRepository = Depends(get_favorites)
):
    """Basic health check endpoint"""
    cfg = request.app.state.settings
    return HealthResponse(
        status="ok",
        service=cfg.app_name,
        version=cfg.app_version,
        store_open=favorites.store.is_open,
        favorites=favorites.restaurants.count(),
    )
