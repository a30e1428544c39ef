"""Favorite restaurant and menu routes"""

from fastapi import APIRouter, Depends, Query, status
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_favorites
from api.responses import DeleteResponse
from domain.schemas.restaurant_schemas import (
    MenuCreate,
    MenuResponse,
    RestaurantCreate,
    RestaurantRename,
    RestaurantResponse,
)
from repositories.favorites_repository import FavoritesRepository

router = APIRouter(prefix="/restaurants", tags=["Restaurants"])
logger = logging.getLogger("besteats.api.restaurants")


@router.get("", response_model=List[RestaurantResponse])
async def list_restaurants(
    q: Optional[str] = Query(None, description="Filter by name (case and accent insensitive)"),
    favorites: FavoritesRepository = Depends(get_favorites),
):
    """List saved restaurants, optionally filtered by name"""
    return [RestaurantResponse.model_validate(r) for r in favorites.search(q)]


@router.post("", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    payload: RestaurantCreate, favorites: FavoritesRepository = Depends(get_favorites)
):
    """Save a new restaurant with optional menus"""
    restaurant = favorites.create(payload.name, payload.menus)
    return RestaurantResponse.model_validate(restaurant)


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: UUID, favorites: FavoritesRepository = Depends(get_favorites)
):
    """Get a saved restaurant with its menus"""
    return RestaurantResponse.model_validate(favorites.get(restaurant_id))


@router.patch("/{restaurant_id}", response_model=RestaurantResponse)
async def rename_restaurant(
    restaurant_id: UUID,
    payload: RestaurantRename,
    favorites: FavoritesRepository = Depends(get_favorites),
):
    """
    Rename a saved restaurant.

    A missing or blank name leaves the restaurant unchanged.
    """
    restaurant = favorites.rename(favorites.get(restaurant_id), payload.name)
    return RestaurantResponse.model_validate(restaurant)


@router.delete("/{restaurant_id}", response_model=DeleteResponse)
async def delete_restaurant(
    restaurant_id: UUID, favorites: FavoritesRepository = Depends(get_favorites)
):
    """Delete a saved restaurant and all of its menus"""
    favorites.remove(favorites.get(restaurant_id))
    return DeleteResponse(removed=str(restaurant_id))


@router.post(
    "/{restaurant_id}/menus",
    response_model=MenuResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_menu(
    restaurant_id: UUID,
    payload: MenuCreate,
    favorites: FavoritesRepository = Depends(get_favorites),
):
    """Add a menu to a saved restaurant"""
    menu = favorites.add_menu(favorites.get(restaurant_id), payload.name, payload.price)
    return MenuResponse.model_validate(menu)


@router.delete("/{restaurant_id}/menus/{menu_id}", response_model=DeleteResponse)
async def delete_menu(
    restaurant_id: UUID,
    menu_id: UUID,
    favorites: FavoritesRepository = Depends(get_favorites),
):
    """Delete one menu of a saved restaurant"""
    favorites.remove_menu(favorites.get(restaurant_id), menu_id)
    return DeleteResponse(removed=str(menu_id))
