"""
Client for the Steam store API.

Builds requests, unwraps the store's response envelopes into
contracts, and pages through reviews with the store's cursor.
"""

from steam_storefront.client.errors import (
    DecodeError,
    IdNotFound,
    IncorrectCountryCode,
    ParseIdError,
    RateLimitError,
    RequestError,
    ResponseWithNoData,
    ResponseWithNoSuccess,
    SteamError,
    UrlError,
)
from steam_storefront.client.locale import Locale, validate_country_code
from steam_storefront.client.request import RequestBuilder
from steam_storefront.client.reviews import (
    MAX_DAY_RANGE,
    MAX_REVIEWS_PER_PAGE,
    OfftopicActivity,
    PurchaseType,
    ReviewFilter,
    ReviewsFilter,
    ReviewType,
    clamp,
)
from steam_storefront.client.steam import Steam, SteamBuilder

__all__ = [
    # Client
    "Locale",
    "RequestBuilder",
    "Steam",
    "SteamBuilder",
    "validate_country_code",
    # Reviews
    "MAX_DAY_RANGE",
    "MAX_REVIEWS_PER_PAGE",
    "OfftopicActivity",
    "PurchaseType",
    "ReviewFilter",
    "ReviewType",
    "ReviewsFilter",
    "clamp",
    # Errors
    "DecodeError",
    "IdNotFound",
    "IncorrectCountryCode",
    "ParseIdError",
    "RateLimitError",
    "RequestError",
    "ResponseWithNoData",
    "ResponseWithNoSuccess",
    "SteamError",
    "UrlError",
]
