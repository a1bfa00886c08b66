"""
Steam Storefront.

Async client for the unofficial Steam storefront API, returning
typed records for apps, packages, DLC, prices, featured lists
and reviews.
"""

from steam_storefront.client import (
    IdNotFound,
    IncorrectCountryCode,
    ParseIdError,
    RequestError,
    ResponseWithNoData,
    ResponseWithNoSuccess,
    ReviewsFilter,
    Steam,
    SteamBuilder,
    SteamError,
    UrlError,
)
from steam_storefront.config import Settings, get_settings
from steam_storefront.contracts import Language
from steam_storefront.logger import get_logger, setup_logging

__version__ = "0.1.0"

__all__ = [
    "IdNotFound",
    "IncorrectCountryCode",
    "Language",
    "ParseIdError",
    "RequestError",
    "ResponseWithNoData",
    "ResponseWithNoSuccess",
    "ReviewsFilter",
    "Settings",
    "Steam",
    "SteamBuilder",
    "SteamError",
    "UrlError",
    "get_logger",
    "get_settings",
    "setup_logging",
    "__version__",
]
