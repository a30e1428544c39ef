"""
Location session - device position, food category and the nearby search.

The session is driven from a single event loop. Searches run as tasks off the
caller; each carries a sequence number and a response is applied only if it
is newer than the last applied one and still matches the current category,
so a slow reply for an old category can never overwrite a newer result.
"""

from typing import Iterable, Optional, Tuple
import asyncio

from adapters.kakao_local import PlaceSearchClient
from adapters.location import LocationProvider
from app.exceptions import AppError, LocationError, SearchError
from core.base.base_service import BaseService
from domain.enums import (
    FoodCategory,
    LocationErrorCode,
    LocationStatus,
    SearchErrorCode,
    SessionEvent,
)
from domain.schemas.place_schemas import Coordinate, Place, SessionSnapshot


class LocationSession(BaseService[SessionSnapshot]):
    """Owns the current coordinate, the category facet and the applied place list"""

    def __init__(
        self,
        location_provider: LocationProvider,
        search_client: PlaceSearchClient,
        category: FoodCategory = FoodCategory.CAFE,
        radius: int = 1000,
        search_timeout: float = 5.0,
        location_timeout: float = 10.0,
    ):
        super().__init__("besteats.location")
        self.location_provider = location_provider
        self.search_client = search_client
        self.radius = radius
        self.search_timeout = search_timeout
        self.location_timeout = location_timeout

        self.status = LocationStatus.AWAITING
        self.coordinate: Optional[Coordinate] = None
        self.category = FoodCategory(category)
        self.places: Tuple[Place, ...] = ()
        self.last_error: Optional[AppError] = None

        self._issued_seq = 0
        self._applied_seq = 0
        self._has_fix = False
        self._in_flight: Optional[asyncio.Task] = None
        self._last_event: Optional[SessionEvent] = None
        self._last_first_fix = False

    @property
    def applied_sequence(self) -> int:
        return self._applied_seq

    @property
    def issued_sequence(self) -> int:
        return self._issued_seq

    @property
    def is_searching(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            event=self._last_event,
            status=self.status,
            coordinate=self.coordinate,
            category=self.category,
            places=self.places,
            sequence=self._applied_seq,
            first_fix=self._last_first_fix,
            error=str(self.last_error) if self.last_error else None,
        )

    def _emit(self, event: SessionEvent, first_fix: bool = False) -> SessionSnapshot:
        self._last_event = event
        self._last_first_fix = first_fix
        return self.publish()

    # ------------------------------------------------------------------
    # Location
    # ------------------------------------------------------------------

    async def request_authorization(self) -> LocationStatus:
        """Ask for location access again; the only way out of DENIED"""
        granted = await self.location_provider.request_authorization()
        if granted:
            self.status = LocationStatus.LOCATED if self.coordinate else LocationStatus.AWAITING
            self.last_error = None
        else:
            self.status = LocationStatus.UNAUTHORIZED
        self.log_info("Authorization requested", granted=granted, status=self.status.value)
        self._emit(SessionEvent.AUTHORIZATION_CHANGED)
        return self.status

    async def get_current_location(self) -> Optional[Coordinate]:
        """
        Acquire a location fix.

        The first fix triggers the initial search for the current category;
        later fixes only move the coordinate (the map recenters on them).
        Returns None while the fix is pending or once location is denied.
        """
        if self.status == LocationStatus.DENIED:
            self.log_debug("Location denied; not requesting a fix")
            return None

        try:
            granted = await asyncio.wait_for(
                self.location_provider.request_authorization(), self.location_timeout
            )
            if not granted:
                raise LocationError(LocationErrorCode.DENIED, "Location permission denied")
            coordinate = await asyncio.wait_for(
                self.location_provider.current_coordinate(), self.location_timeout
            )
        except asyncio.TimeoutError:
            self._fail_location(
                LocationError(LocationErrorCode.TIMEOUT, "Timed out waiting for a location fix")
            )
            return None
        except LocationError as exc:
            self._fail_location(exc)
            return None

        if coordinate is None:
            # A later pending fix keeps the last coordinate in place
            if not self._has_fix:
                self.status = LocationStatus.AWAITING
            self.log_debug("Location fix pending")
            return None

        first_fix = not self._has_fix
        self._has_fix = True
        self.coordinate = coordinate
        self.status = LocationStatus.LOCATED
        if isinstance(self.last_error, LocationError):
            self.last_error = None
        self.log_info(
            "Location updated",
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
            first_fix=first_fix,
        )
        self._emit(SessionEvent.LOCATION_UPDATED, first_fix=first_fix)

        if first_fix:
            await self.search()
        return coordinate

    def _fail_location(self, exc: LocationError) -> None:
        self.status = LocationStatus.DENIED
        self.last_error = exc
        self.log_warning("Location unavailable", code=exc.code, error=exc.message)
        self._emit(SessionEvent.LOCATION_FAILED)

    # ------------------------------------------------------------------
    # Category and search
    # ------------------------------------------------------------------

    async def set_category(self, category: FoodCategory) -> bool:
        """
        Switch the search facet. The current place list is invalidated and,
        once located, a new search runs. Returns True if results were applied.
        """
        category = FoodCategory(category)
        if category == self.category:
            return False

        self.category = category
        self.places = ()
        self.log_info("Category changed", category=category.value)
        self._emit(SessionEvent.CATEGORY_CHANGED)

        if self.coordinate is None:
            return False
        return await self.search()

    async def search(self) -> bool:
        """
        Search around the current coordinate for the current category.

        A newer search cancels the fetch of an older one. Returns True if this
        search's results were applied.

        Raises:
            LocationError: if there is no location fix yet
        """
        if self.coordinate is None:
            raise LocationError(LocationErrorCode.UNAVAILABLE, "No location fix yet")

        self._issued_seq += 1
        seq = self._issued_seq
        category = self.category
        coordinate = self.coordinate

        task = asyncio.ensure_future(self._fetch(coordinate, category))
        previous, self._in_flight = self._in_flight, task
        if previous is not None and not previous.done():
            previous.cancel()

        self.log_debug("Search issued", sequence=seq, category=category.value)
        try:
            places = await task
        except asyncio.CancelledError:
            if self._in_flight is not task:
                self.log_debug("Search superseded", sequence=seq)
                return False
            raise
        except SearchError as exc:
            return self._fail_search(seq, exc)
        finally:
            if self._in_flight is task:
                self._in_flight = None

        return self.apply_response(seq, category, places)

    async def _fetch(self, coordinate: Coordinate, category: FoodCategory):
        try:
            return await asyncio.wait_for(
                self.search_client.search(coordinate, category, self.radius),
                self.search_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise SearchError(SearchErrorCode.TIMEOUT, "Place search timed out") from exc

    def apply_response(
        self, seq: int, category: FoodCategory, places: Iterable[Place]
    ) -> bool:
        """
        Apply a search response if it is the newest one for the current category.

        Returns:
            True if the place list was replaced, False if the response was stale
        """
        self._issued_seq = max(self._issued_seq, seq)
        if seq <= self._applied_seq or category != self.category:
            self.log_debug(
                "Dropping stale search response",
                sequence=seq,
                applied=self._applied_seq,
                category=FoodCategory(category).value,
            )
            return False

        self._applied_seq = seq
        self.places = tuple(places)
        if isinstance(self.last_error, SearchError):
            self.last_error = None
        self.log_info(
            "Search results applied",
            sequence=seq,
            category=category.value,
            count=len(self.places),
        )
        self._emit(SessionEvent.RESULTS_APPLIED)
        return True

    def _fail_search(self, seq: int, exc: SearchError) -> bool:
        if seq != self._issued_seq:
            self.log_debug("Ignoring failure of superseded search", sequence=seq)
            return False
        # Keep the last applied places on failure
        self.last_error = exc
        self.log_warning("Search failed", sequence=seq, code=exc.code, error=exc.message)
        self._emit(SessionEvent.SEARCH_FAILED)
        return False

    async def aclose(self) -> None:
        """Cancel any search still in flight"""
        task, self._in_flight = self._in_flight, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except (asyncio.CancelledError, SearchError):
                pass
