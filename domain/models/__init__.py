"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import Base, utcnow
from domain.models.restaurant import Restaurant, Menu

__all__ = [
    # Database
    "Base",
    "utcnow",
    # Favorites models
    "Restaurant",
    "Menu",
]
