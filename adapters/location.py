"""
Device location capability.

The map session only needs two things from the platform: an authorization
request and the current coordinate. On the server the app client reports its
fixes, so ReportedLocationProvider just holds the latest one.
"""

from typing import Optional, Protocol
import logging

from app.exceptions import LocationError
from domain.enums import LocationErrorCode
from domain.schemas.place_schemas import Coordinate

logger = logging.getLogger("besteats.location")


class LocationProvider(Protocol):
    async def request_authorization(self) -> bool:
        """True if location access is granted"""
        ...

    async def current_coordinate(self) -> Optional[Coordinate]:
        """Latest fix, None while pending; raises LocationError when denied or failed"""
        ...


class ReportedLocationProvider:
    """Location provider fed by fixes the app client reports"""

    def __init__(self, default: Optional[Coordinate] = None, authorized: bool = True):
        self._coordinate = default
        self._authorized = authorized

    @property
    def authorized(self) -> bool:
        return self._authorized

    def report(self, coordinate: Coordinate) -> None:
        self._coordinate = coordinate

    def grant(self) -> None:
        self._authorized = True

    def revoke(self) -> None:
        self._authorized = False

    async def request_authorization(self) -> bool:
        return self._authorized

    async def current_coordinate(self) -> Optional[Coordinate]:
        if not self._authorized:
            raise LocationError(LocationErrorCode.DENIED, "Location permission denied")
        return self._coordinate
