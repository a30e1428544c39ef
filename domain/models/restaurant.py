"""
Favorite restaurant and menu models.
"""

from sqlalchemy import (
    Column,
    Text,
    TIMESTAMP,
    ForeignKey,
    Integer,
    Numeric,
    Uuid,
    CheckConstraint,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow


class Restaurant(Base):
    """A restaurant saved by the user; owns its menus"""

    __tablename__ = "restaurant"

    restaurant_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    # Relationships
    menus = relationship(
        "Menu",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="Menu.position",
        collection_class=ordering_list("position"),
    )

    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="ck_restaurant_name_nonempty"),
    )

    def __repr__(self):
        return f"<Restaurant(id={self.restaurant_id}, name='{self.name}')>"


class Menu(Base):
    """A menu entry; belongs to exactly one restaurant"""

    __tablename__ = "menu"

    menu_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(
        Uuid,
        ForeignKey("restaurant.restaurant_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(Text, nullable=False)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    restaurant = relationship("Restaurant", back_populates="menus")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_menu_price_nonneg"),
        CheckConstraint("length(trim(name)) > 0", name="ck_menu_name_nonempty"),
    )

    def __repr__(self):
        return f"<Menu(id={self.menu_id}, name='{self.name}', price={self.price})>"
