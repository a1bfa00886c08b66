"""
Data contracts for Steam applications, genres and store listings.

These Pydantic models mirror the appdetails, getgenrelist,
getappsingenre and getappsincategory responses.
"""

from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from steam_storefront.contracts.common import (
    Platforms,
    ReleaseDate,
    StatusModel,
    StoreModel,
    empty_as_none,
)
from steam_storefront.contracts.price import AppPrice


class ContentDescriptors(StoreModel):
    """Mature content descriptors."""

    ids: list[int] = Field(default_factory=list)
    notes: str | None = None


class SupportInfo(StoreModel):
    """Publisher support contacts."""

    url: str = ""
    email: str = ""


class Achievement(StoreModel):
    """Highlighted achievement."""

    name: str
    path: str


class Achievements(StoreModel):
    """Achievement summary."""

    total: int = Field(..., ge=0)
    highlighted: list[Achievement] | None = None


class MovieFormat(StoreModel):
    """Movie URLs for one container format."""

    x480: str = Field(..., alias="480")
    max: str


class Movie(StoreModel):
    """Trailer or gameplay movie."""

    id: int
    name: str
    thumbnail: str
    highlight: bool
    webm: MovieFormat | None = None
    mp4: MovieFormat | None = None


class Screenshot(StoreModel):
    """Game screenshot."""

    id: int
    path_thumbnail: str
    path_full: str


class Metacritic(StoreModel):
    """Metacritic score information."""

    score: int = Field(..., ge=0, le=100)
    url: str = Field(default="")


class Requirements(StoreModel):
    """System requirements (HTML fragments)."""

    minimum: str | None = None
    recommended: str | None = None


class Recommendations(StoreModel):
    """Number of user recommendations."""

    total: int = Field(..., ge=0)


class Category(StoreModel):
    """Store category attached to an app."""

    id: int
    description: str


class Genre(StoreModel):
    """
    Store genre.

    App details carry ``description``; the genre list carries ``name``.
    """

    id: str
    name: str | None = None
    description: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v


class AppDetails(StoreModel):
    """
    Complete application data from the appdetails endpoint.

    Related packages and DLC are referenced by ID only.
    """

    # Identifiers
    type: str = Field(..., description="game, dlc, demo, advertising, mod, video")
    name: str
    app_id: int = Field(..., alias="steam_appid")

    # Classification
    required_age: int | None = None
    is_free: bool | None = None
    controller_support: str | None = None
    dlc: list[int] | None = Field(default=None, description="DLC app IDs")

    # Description
    detailed_description: str | None = None
    about_the_game: str | None = None
    short_description: str | None = None
    supported_languages: str | None = None

    # Media
    header_image: str | None = None
    capsule_image: str | None = None
    capsule_imagev5: str | None = None
    website: str | None = None

    # Requirements
    pc_requirements: Requirements | None = None
    mac_requirements: Requirements | None = None
    linux_requirements: Requirements | None = None

    legal_notice: str | None = None
    developers: list[str] | None = None
    publishers: list[str] | None = None
    price_overview: AppPrice | None = None
    packages: list[int] | None = Field(default=None, description="Package IDs")
    platforms: Platforms | None = None
    metacritic: Metacritic | None = None
    categories: list[Category] | None = None
    genres: list[Genre] | None = None
    screenshots: list[Screenshot] | None = None
    movies: list[Movie] | None = None
    recommendations: Recommendations | None = None
    achievements: Achievements | None = None
    release_date: ReleaseDate | None = None
    support_info: SupportInfo | None = None
    background: str | None = None
    background_raw: str | None = None
    content_descriptors: ContentDescriptors | None = None

    @field_validator("required_age", mode="before")
    @classmethod
    def coerce_required_age(cls, v: Any) -> Any:
        """The API returns required_age either as a number or a numeric string."""
        if isinstance(v, str):
            return int(v) if v.isdigit() else None
        return v

    @field_validator("pc_requirements", "mac_requirements", "linux_requirements", mode="before")
    @classmethod
    def empty_requirements(cls, v: Any) -> Any:
        """Missing requirements are sent as an empty list."""
        return empty_as_none(v)

    @field_validator("price_overview", mode="before")
    @classmethod
    def stamp_price_app_id(cls, v: Any, info: ValidationInfo) -> Any:
        """Attach the app ID to the nested price, which does not carry it."""
        if isinstance(v, dict) and "app_id" not in v:
            app_id = info.data.get("app_id")
            if app_id is not None:
                return {**v, "app_id": app_id}
        return v

    @property
    def genre_names(self) -> list[str]:
        """Extract genre names as simple list."""
        return [g.description or g.name or g.id for g in self.genres or []]

    @property
    def category_names(self) -> list[str]:
        """Extract category names as simple list."""
        return [c.description for c in self.categories or []]


class GenreList(StatusModel):
    """Body of the getgenrelist endpoint."""

    genres: list[Genre] = Field(default_factory=list)

    @property
    def payload(self) -> list[Genre]:
        return self.genres


class TabItem(StoreModel):
    """Application listed on a tab."""

    type: int = Field(..., description="Game, DLC, movie, etc.")
    app_id: int = Field(..., alias="id")


class Tab(StoreModel):
    """Listing tab, e.g. Top Sellers or Specials."""

    name: str
    total_item_count: int = Field(..., ge=0)
    items: list[TabItem] = Field(default_factory=list)


class AppsIn(StatusModel):
    """Apps of one genre or category, grouped by tab."""

    id: str = Field(..., description="ID of genre or category")
    name: str = Field(..., description="Name of genre or category")
    tabs: dict[str, Tab] | None = None

    @field_validator("tabs", mode="before")
    @classmethod
    def empty_tabs(cls, v: Any) -> Any:
        return empty_as_none(v)
