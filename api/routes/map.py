"""Nearby map routes: location, category, selection"""

from fastapi import APIRouter, Depends
import logging
from typing import List

from adapters.location import ReportedLocationProvider
from api.dependencies import (
    get_location_provider,
    get_location_session,
    get_map_controller,
)
from domain.enums import FoodCategory
from domain.schemas.place_schemas import (
    CategoryResponse,
    CategoryUpdate,
    LocationReport,
    MapSnapshot,
)
from services.location_session import LocationSession
from services.map_controller import MapInteractionController

router = APIRouter(prefix="/map", tags=["Map"])
logger = logging.getLogger("besteats.api.map")


@router.get("", response_model=MapSnapshot)
async def get_map_state(controller: MapInteractionController = Depends(get_map_controller)):
    """Current map state: places, nearest/selected place, viewport and info panel"""
    return controller.snapshot()


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories():
    """Selectable food categories"""
    return [
        CategoryResponse(value=c, label=c.label, keyword=c.keyword) for c in FoodCategory
    ]


@router.post("/location", response_model=MapSnapshot)
async def report_location(
    report: LocationReport,
    provider: ReportedLocationProvider = Depends(get_location_provider),
    session: LocationSession = Depends(get_location_session),
    controller: MapInteractionController = Depends(get_map_controller),
):
    """
    Report a device fix.

    The first fix runs the initial search for the current category; later
    fixes only recenter the map.
    """
    provider.report(report.to_coordinate())
    await session.get_current_location()
    return controller.snapshot()


@router.post("/recenter", response_model=MapSnapshot)
async def recenter(
    session: LocationSession = Depends(get_location_session),
    controller: MapInteractionController = Depends(get_map_controller),
):
    """Re-acquire the last known fix and center the map on it"""
    await session.get_current_location()
    return controller.snapshot()


@router.post("/authorization", response_model=MapSnapshot)
async def request_authorization(
    provider: ReportedLocationProvider = Depends(get_location_provider),
    session: LocationSession = Depends(get_location_session),
    controller: MapInteractionController = Depends(get_map_controller),
):
    """Grant location access again after it was denied"""
    provider.grant()
    await session.request_authorization()
    return controller.snapshot()


@router.delete("/authorization", response_model=MapSnapshot)
async def revoke_authorization(
    provider: ReportedLocationProvider = Depends(get_location_provider),
    session: LocationSession = Depends(get_location_session),
    controller: MapInteractionController = Depends(get_map_controller),
):
    """Withdraw location access; the session stays denied until re-authorized"""
    provider.revoke()
    await session.get_current_location()
    return controller.snapshot()


@router.put("/category", response_model=MapSnapshot)
async def change_category(
    update: CategoryUpdate,
    session: LocationSession = Depends(get_location_session),
    controller: MapInteractionController = Depends(get_map_controller),
):
    """Switch the food category; clears the selection and searches again"""
    await session.set_category(update.category)
    return controller.snapshot()


@router.post("/places/{place_id}/select", response_model=MapSnapshot)
async def select_place(
    place_id: str, controller: MapInteractionController = Depends(get_map_controller)
):
    """Select one of the current places and center the map on it"""
    controller.select_by_id(place_id)
    return controller.snapshot()


@router.delete("/selection", response_model=MapSnapshot)
async def clear_selection(controller: MapInteractionController = Depends(get_map_controller)):
    """Drop the explicit selection; the nearest place governs again"""
    controller.clear_selection()
    return controller.snapshot()


@router.post("/search", response_model=MapSnapshot)
async def search_again(
    session: LocationSession = Depends(get_location_session),
    controller: MapInteractionController = Depends(get_map_controller),
):
    """Run the search again for the current location and category"""
    await session.search()
    return controller.snapshot()
