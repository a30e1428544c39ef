"""
Domain enums for BestEats.
Contains all enumeration types used across the domain models and sessions.
"""

import enum


class FoodCategory(str, enum.Enum):
    """Search facet for nearby places; the value is stable, the keyword is sent to the search API"""

    CAFE = "cafe"
    KOREAN = "korean"
    CHINESE = "chinese"
    JAPANESE = "japanese"
    WESTERN = "western"
    SNACK = "snack"
    CHICKEN = "chicken"
    PIZZA = "pizza"
    FAST_FOOD = "fast_food"
    DESSERT = "dessert"

    @property
    def keyword(self) -> str:
        return _CATEGORY_KEYWORDS[self]

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_KEYWORDS = {
    FoodCategory.CAFE: "카페",
    FoodCategory.KOREAN: "한식",
    FoodCategory.CHINESE: "중식",
    FoodCategory.JAPANESE: "일식",
    FoodCategory.WESTERN: "양식",
    FoodCategory.SNACK: "분식",
    FoodCategory.CHICKEN: "치킨",
    FoodCategory.PIZZA: "피자",
    FoodCategory.FAST_FOOD: "패스트푸드",
    FoodCategory.DESSERT: "디저트",
}

_CATEGORY_LABELS = {
    FoodCategory.CAFE: "Cafe",
    FoodCategory.KOREAN: "Korean",
    FoodCategory.CHINESE: "Chinese",
    FoodCategory.JAPANESE: "Japanese",
    FoodCategory.WESTERN: "Western",
    FoodCategory.SNACK: "Snack bar",
    FoodCategory.CHICKEN: "Chicken",
    FoodCategory.PIZZA: "Pizza",
    FoodCategory.FAST_FOOD: "Fast food",
    FoodCategory.DESSERT: "Dessert",
}


class LocationStatus(str, enum.Enum):
    """Device location state of a session"""

    UNAUTHORIZED = "unauthorized"
    AWAITING = "awaiting"
    LOCATED = "located"
    DENIED = "denied"


class SessionEvent(str, enum.Enum):
    """Reason a session snapshot was published"""

    LOCATION_UPDATED = "location_updated"
    LOCATION_FAILED = "location_failed"
    CATEGORY_CHANGED = "category_changed"
    RESULTS_APPLIED = "results_applied"
    SEARCH_FAILED = "search_failed"
    AUTHORIZATION_CHANGED = "authorization_changed"


class SearchErrorCode(str, enum.Enum):
    """Failure kinds of a place search"""

    EMPTY_DATA = "empty_data"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    TIMEOUT = "timeout"
    NOT_CONFIGURED = "not_configured"


class LocationErrorCode(str, enum.Enum):
    """Failure kinds of a location fix"""

    DENIED = "denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
