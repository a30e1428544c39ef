"""
Map interaction - nearest/selected place, viewport and the info panel.
"""

from typing import Optional

from app.exceptions import NotFoundError
from core.base.base_service import BaseService
from core.utils.helpers import format_distance
from domain.enums import SessionEvent
from domain.schemas.place_schemas import (
    Coordinate,
    MapSnapshot,
    Place,
    PlaceInfo,
    Region,
    SessionSnapshot,
)
from services.location_session import LocationSession

NO_DATA = "정보없음"


class MapInteractionController(BaseService[MapSnapshot]):
    """
    Derives view state from a LocationSession.

    The nearest place is the first result of the last applied search. An
    explicit selection takes precedence over it for centering and for the
    info panel until the category changes.
    """

    def __init__(
        self,
        session: LocationSession,
        span_delta: float = 0.01,
        no_data_label: str = NO_DATA,
    ):
        super().__init__("besteats.map")
        self.session = session
        self.span_delta = span_delta
        self.no_data_label = no_data_label

        self.nearest: Optional[Place] = None
        self.selected: Optional[Place] = None
        self.viewport: Optional[Region] = None
        self._unsubscribe = session.subscribe(self._on_session)

    def close(self) -> None:
        self._unsubscribe()

    def _on_session(self, snap: SessionSnapshot) -> None:
        if snap.event == SessionEvent.RESULTS_APPLIED:
            self.nearest = snap.places[0] if snap.places else None
            if self.selected is None and self.nearest is not None:
                self.recenter(self.nearest.coordinate)
        elif snap.event == SessionEvent.CATEGORY_CHANGED:
            self.selected = None
            self.nearest = None
        elif snap.event == SessionEvent.LOCATION_UPDATED and snap.coordinate is not None:
            self.recenter(snap.coordinate)
        self.publish()

    # ------------------------------------------------------------------
    # Selection and viewport
    # ------------------------------------------------------------------

    def recenter(self, coordinate: Coordinate) -> Region:
        self.viewport = Region(
            center=coordinate,
            latitude_delta=self.span_delta,
            longitude_delta=self.span_delta,
        )
        return self.viewport

    def select(self, place: Place) -> Place:
        """Select a place explicitly and center the map on it"""
        self.selected = place
        self.recenter(place.coordinate)
        self.log_info("Place selected", place_id=place.id, name=place.name)
        self.publish()
        return place

    def select_by_id(self, place_id: str) -> Place:
        """
        Select a place from the current results.

        Raises:
            NotFoundError: if the id is not among the applied results
        """
        for place in self.session.places:
            if place.id == place_id:
                return self.select(place)
        raise NotFoundError(f"Place not in current results: {place_id}")

    def clear_selection(self) -> None:
        self.selected = None
        if self.nearest is not None:
            self.recenter(self.nearest.coordinate)
        self.publish()

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def focused(self) -> Optional[Place]:
        """The place shown in the info panel: the selection, else the nearest"""
        return self.selected if self.selected is not None else self.nearest

    def place_info(self) -> PlaceInfo:
        """
        Resolve the info panel from a single source place.

        Each field falls back to the no-data label when that source lacks it;
        fields are never borrowed from the nearest place while a selection is
        active.
        """
        place = self.focused
        if place is None:
            return PlaceInfo(
                name=self.no_data_label,
                category=self.no_data_label,
                address=self.no_data_label,
                distance=self.no_data_label,
            )

        distance = place.distance_m
        return PlaceInfo(
            name=place.name or self.no_data_label,
            category=place.category_name or self.no_data_label,
            address=place.road_address or place.address or self.no_data_label,
            distance=format_distance(distance) if distance is not None else self.no_data_label,
        )

    def nearby_summary(self) -> str:
        return f"근처에 {len(self.session.places)}개의 맛집이 있어요!"

    def snapshot(self) -> MapSnapshot:
        session = self.session
        return MapSnapshot(
            status=session.status,
            coordinate=session.coordinate,
            category=session.category,
            places=session.places,
            nearest=self.nearest,
            selected=self.selected,
            viewport=self.viewport,
            info=self.place_info(),
            summary=self.nearby_summary(),
            error=str(session.last_error) if session.last_error else None,
        )
