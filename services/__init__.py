"""
Services package - Stateful map session logic.
"""

from services.location_session import LocationSession
from services.map_controller import MapInteractionController

__all__ = [
    "LocationSession",
    "MapInteractionController",
]
