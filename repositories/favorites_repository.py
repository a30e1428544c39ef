"""
Favorites Repository - In-memory reflection of the persistent store.

Consumers read the cached list (optionally filtered by name) and mutate
through create/rename/remove and the menu operations. Every mutation is
followed by a full re-fetch from storage, whether it succeeded or not, and a
FavoritesSnapshot is published to subscribers.
"""

from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional, Union
from uuid import UUID
import logging

from adapters.store import PersistentStore
from app.exceptions import NotFoundError, ServiceValidationError
from core.events import EventChannel
from core.utils.helpers import is_blank, standard_contains
from domain.models import Menu, Restaurant
from domain.schemas.restaurant_schemas import (
    FavoritesSnapshot,
    MenuCreate,
    RestaurantResponse,
)
from repositories.restaurant_repository import MenuRepository, RestaurantRepository

logger = logging.getLogger("besteats.favorites")

PriceLike = Union[Decimal, int, float, str]


class FavoritesRepository:
    """Saved restaurants with search, CRUD and re-sync after every change"""

    def __init__(self, store: PersistentStore):
        self.store = store
        self.restaurants = RestaurantRepository(store)
        self.menus = MenuRepository(store)
        self.events: EventChannel[FavoritesSnapshot] = EventChannel("besteats.favorites")
        self._cache: List[Restaurant] = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load(self) -> List[Restaurant]:
        """Re-read every restaurant from storage and publish the result"""
        self.store.refresh()
        self._cache = self.store.fetch_all()
        logger.debug("Loaded %d favorites", len(self._cache))
        self.events.publish(self.snapshot())
        return list(self._cache)

    def list_all(self) -> List[Restaurant]:
        """All saved restaurants in storage fetch order"""
        return list(self._cache)

    def search(self, query: Optional[str]) -> List[Restaurant]:
        """
        Filter saved restaurants by name.

        An empty query returns list_all(); otherwise the match is a case-,
        diacritic- and width-insensitive substring test on the name.
        """
        if not query:
            return self.list_all()
        return [r for r in self._cache if standard_contains(r.name, query)]

    def get(self, restaurant_id: UUID) -> Restaurant:
        restaurant = self.restaurants.get_by_id(restaurant_id)
        if restaurant is None:
            raise NotFoundError(f"Restaurant not found: {restaurant_id}")
        return restaurant

    def snapshot(self) -> FavoritesSnapshot:
        return FavoritesSnapshot(
            restaurants=tuple(RestaurantResponse.model_validate(r) for r in self._cache)
        )

    def subscribe(self, listener):
        """Register a FavoritesSnapshot listener; returns an unsubscribe callable"""
        return self.events.subscribe(listener)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @contextmanager
    def _resync(self):
        try:
            yield
        finally:
            self.load()

    def create(self, name: str, menus: Iterable[MenuCreate] = ()) -> Restaurant:
        """
        Save a new restaurant, optionally with menus.

        Raises:
            ServiceValidationError: if the name is empty or a menu is invalid
            StorageError: if the store cannot persist the restaurant
        """
        if is_blank(name):
            raise ServiceValidationError("Restaurant name must not be empty")

        restaurant = Restaurant(name=name)
        for item in menus:
            restaurant.menus.append(self._build_menu(item.name, item.price))

        self.store.add(restaurant)
        with self._resync():
            self.store.save()
        logger.info("Saved restaurant %s (%s)", restaurant.restaurant_id, restaurant.name)
        return restaurant

    def rename(self, restaurant: Restaurant, new_name: Optional[str]) -> Restaurant:
        """Rename a restaurant; a missing or blank name is ignored"""
        if is_blank(new_name):
            logger.debug("Ignoring empty rename for %s", restaurant.restaurant_id)
            return restaurant

        restaurant.name = new_name
        with self._resync():
            self.store.save()
        logger.info("Renamed restaurant %s to %s", restaurant.restaurant_id, restaurant.name)
        return restaurant

    def remove(self, restaurant: Restaurant) -> None:
        """Delete a restaurant together with all of its menus"""
        restaurant_id = restaurant.restaurant_id
        with self._resync():
            self.store.delete(restaurant)
        logger.info("Removed restaurant %s", restaurant_id)

    def add_menu(self, restaurant: Restaurant, name: str, price: PriceLike = Decimal("0")) -> Menu:
        menu = self._build_menu(name, price)
        restaurant.menus.append(menu)
        with self._resync():
            self.store.save()
        logger.info("Added menu %s to restaurant %s", menu.name, restaurant.restaurant_id)
        return menu

    def remove_menu(self, restaurant: Restaurant, menu_id: UUID) -> None:
        menu = self.menus.get_for_restaurant(restaurant.restaurant_id, menu_id)
        if menu is None:
            raise NotFoundError(
                f"Menu {menu_id} not found for restaurant {restaurant.restaurant_id}"
            )
        with self._resync():
            self.store.delete(menu)
        logger.info("Removed menu %s from restaurant %s", menu_id, restaurant.restaurant_id)

    @staticmethod
    def _build_menu(name: str, price: PriceLike) -> Menu:
        if is_blank(name):
            raise ServiceValidationError("Menu name must not be empty")
        try:
            amount = Decimal(str(price))
        except (InvalidOperation, TypeError, ValueError):
            raise ServiceValidationError(f"Invalid menu price: {price!r}")
        if not amount.is_finite() or amount < 0:
            raise ServiceValidationError(f"Menu price must be non-negative: {price!r}")
        return Menu(name=name.strip(), price=amount)
