from pydantic import BaseModel, Field
from typing import Optional, List, Tuple
from datetime import datetime
from uuid import UUID
from decimal import Decimal


class MenuCreate(BaseModel):
    """Schema for adding a menu to a saved restaurant"""

    name: str = Field(..., min_length=1, description="Menu name")
    price: Decimal = Field(default=Decimal("0"), ge=0, description="Menu price")


class RestaurantCreate(BaseModel):
    """Schema for saving a new favorite restaurant"""

    name: str = Field(..., min_length=1, description="Restaurant name")
    menus: List[MenuCreate] = Field(
        default_factory=list, description="Menus saved together with the restaurant"
    )


class RestaurantRename(BaseModel):
    """Schema for renaming a restaurant; a missing or blank name leaves it unchanged"""

    name: Optional[str] = Field(None, description="New restaurant name")


class MenuResponse(BaseModel):
    """Schema for menu response"""

    menu_id: UUID
    restaurant_id: UUID
    name: str
    price: Decimal
    created_at: datetime

    model_config = {"from_attributes": True, "frozen": True}


class RestaurantResponse(BaseModel):
    """Schema for restaurant response with its menus"""

    restaurant_id: UUID
    name: str
    created_at: datetime
    updated_at: datetime
    menus: Tuple[MenuResponse, ...] = ()

    model_config = {"from_attributes": True, "frozen": True}


class FavoritesSnapshot(BaseModel):
    """Immutable view of the favorites store published after every re-sync"""

    restaurants: Tuple[RestaurantResponse, ...] = ()

    model_config = {"frozen": True}

    @property
    def count(self) -> int:
        return len(self.restaurants)
