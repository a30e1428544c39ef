"""
Restaurant Repository - Data access layer for saved restaurants and menus
"""

from typing import Optional
from uuid import UUID
from sqlalchemy import select, func

from adapters.store import PersistentStore
from repositories.base import BaseRepository
from domain.models import Restaurant, Menu


class RestaurantRepository(BaseRepository[Restaurant]):
    """Repository for restaurant data access"""

    def __init__(self, store: PersistentStore):
        super().__init__(store, Restaurant)

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(Restaurant)) or 0


class MenuRepository(BaseRepository[Menu]):
    """Repository for menu data access"""

    def __init__(self, store: PersistentStore):
        super().__init__(store, Menu)

    def get_for_restaurant(self, restaurant_id: UUID, menu_id: UUID) -> Optional[Menu]:
        """Get a menu only if it belongs to the given restaurant"""
        stmt = select(Menu).where(
            Menu.menu_id == menu_id, Menu.restaurant_id == restaurant_id
        )
        return self.db.scalars(stmt).first()
