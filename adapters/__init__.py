"""
Adapters package - External capabilities.
The favorites store, the Kakao Local search client and the location provider.
"""

from adapters.store import PersistentStore
from adapters.kakao_local import KakaoLocalClient, PlaceSearchClient
from adapters.location import LocationProvider, ReportedLocationProvider

__all__ = [
    "PersistentStore",
    "KakaoLocalClient",
    "PlaceSearchClient",
    "LocationProvider",
    "ReportedLocationProvider",
]
