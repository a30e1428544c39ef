"""API routes package"""

from . import health, restaurants, map

__all__ = ["health", "restaurants", "map"]
