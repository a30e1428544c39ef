"""
Kakao Local keyword search client.

Returns nearby places for a coordinate and food category, nearest first as
ranked by the server (sort=distance).
"""

from typing import Any, Dict, List, Optional, Protocol
import logging

import httpx
from pydantic import ValidationError

from app.exceptions import SearchError
from domain.enums import FoodCategory, SearchErrorCode
from domain.schemas.place_schemas import Coordinate, Place

logger = logging.getLogger("besteats.search")

KEYWORD_SEARCH_PATH = "/v2/local/search/keyword.json"


class PlaceSearchClient(Protocol):
    async def search(
        self, coordinate: Coordinate, category: FoodCategory, radius: int
    ) -> List[Place]:
        ...


def _text(doc: Dict[str, Any], key: str) -> Optional[str]:
    value = doc.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_place(doc: Dict[str, Any]) -> Optional[Place]:
    """Map one Kakao document to a Place; None when id, name or position is missing"""
    place_id = _text(doc, "id")
    name = _text(doc, "place_name")
    try:
        coordinate = Coordinate(latitude=float(doc["y"]), longitude=float(doc["x"]))
    except (KeyError, TypeError, ValueError, ValidationError):
        coordinate = None

    if not place_id or not name or coordinate is None:
        return None

    return Place(
        id=place_id,
        name=name,
        category_name=_text(doc, "category_name"),
        road_address=_text(doc, "road_address_name"),
        address=_text(doc, "address_name"),
        distance=_text(doc, "distance") or "",
        coordinate=coordinate,
        place_url=_text(doc, "place_url"),
        phone=_text(doc, "phone"),
    )


def parse_places(payload: Any) -> List[Place]:
    """
    Map a keyword search response body to places in server order.

    Raises:
        SearchError: EMPTY_DATA if the payload has no documents list
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("documents"), list):
        raise SearchError(
            SearchErrorCode.EMPTY_DATA, "Search response has no documents"
        )

    places = []
    for doc in payload["documents"]:
        place = parse_place(doc) if isinstance(doc, dict) else None
        if place is None:
            logger.warning("Skipping malformed place document: %r", doc)
            continue
        places.append(place)
    return places


class KakaoLocalClient:
    """Async client for the Kakao Local keyword endpoint"""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://dapi.kakao.com",
        timeout: float = 5.0,
        page_size: int = 15,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.page_size = page_size
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def search(
        self, coordinate: Coordinate, category: FoodCategory, radius: int
    ) -> List[Place]:
        """
        Search places matching the category keyword around a coordinate.

        Returns:
            Places nearest first; an empty list is a valid result

        Raises:
            SearchError: on missing configuration, transport failure, timeout,
                non-2xx status or an unusable payload
        """
        if not self.api_key:
            raise SearchError(
                SearchErrorCode.NOT_CONFIGURED, "Kakao REST API key is not configured"
            )

        params = {
            "query": category.keyword,
            "x": f"{coordinate.longitude}",
            "y": f"{coordinate.latitude}",
            "radius": radius,
            "size": self.page_size,
            "sort": "distance",
        }
        headers = {"Authorization": f"KakaoAK {self.api_key}"}

        logger.debug("Searching %s around %s", category.value, coordinate)
        try:
            response = await self._client.get(
                KEYWORD_SEARCH_PATH, params=params, headers=headers
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise SearchError(SearchErrorCode.TIMEOUT, "Place search timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise SearchError(
                SearchErrorCode.HTTP_STATUS,
                f"Place search returned HTTP {exc.response.status_code}",
                details={"status_code": exc.response.status_code},
            ) from exc
        except httpx.HTTPError as exc:
            raise SearchError(
                SearchErrorCode.TRANSPORT, f"Place search failed: {exc}"
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchError(
                SearchErrorCode.EMPTY_DATA, "Search response is not JSON"
            ) from exc

        places = parse_places(payload)
        logger.info(
            "Search %s returned %d places", category.value, len(places)
        )
        return places

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
