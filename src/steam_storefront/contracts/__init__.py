"""
Data contracts for Steam Store API responses.

Pydantic models describing every record the storefront returns,
together with the envelopes that wrap them.
"""

from steam_storefront.contracts.app import (
    Achievement,
    Achievements,
    AppDetails,
    AppsIn,
    Category,
    ContentDescriptors,
    Genre,
    GenreList,
    Metacritic,
    Movie,
    MovieFormat,
    Recommendations,
    Requirements,
    Screenshot,
    SupportInfo,
    Tab,
    TabItem,
)
from steam_storefront.contracts.common import (
    DataEnvelope,
    Language,
    Platforms,
    ReleaseDate,
    StatusModel,
    StoreModel,
)
from steam_storefront.contracts.package import (
    Controller,
    DlcData,
    DlcDetails,
    PackageApp,
    PackageDetails,
)
from steam_storefront.contracts.price import (
    AppPrice,
    Featured,
    FeaturedCategories,
    FeaturedCategory,
    FeaturedItem,
    PackagePrice,
    Price,
    PriceOverview,
)
from steam_storefront.contracts.review import Author, QuerySummary, Review, Reviews

__all__ = [
    "Achievement",
    "Achievements",
    "AppDetails",
    "AppPrice",
    "AppsIn",
    "Author",
    "Category",
    "ContentDescriptors",
    "Controller",
    "DataEnvelope",
    "DlcData",
    "DlcDetails",
    "Featured",
    "FeaturedCategories",
    "FeaturedCategory",
    "FeaturedItem",
    "Genre",
    "GenreList",
    "Language",
    "Metacritic",
    "Movie",
    "MovieFormat",
    "PackageApp",
    "PackageDetails",
    "PackagePrice",
    "Platforms",
    "Price",
    "PriceOverview",
    "QuerySummary",
    "Recommendations",
    "ReleaseDate",
    "Requirements",
    "Review",
    "Reviews",
    "Screenshot",
    "StatusModel",
    "StoreModel",
    "SupportInfo",
    "Tab",
    "TabItem",
]
