"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.restaurant_repository import RestaurantRepository, MenuRepository
from repositories.favorites_repository import FavoritesRepository

__all__ = [
    "BaseRepository",
    "RestaurantRepository",
    "MenuRepository",
    "FavoritesRepository",
]
