"""
Data contracts for prices and featured listings.
"""

from decimal import Decimal
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from steam_storefront.contracts.common import StatusModel, StoreModel


class Price(StoreModel):
    """Price in minor currency units (e.g. cents)."""

    currency: str = Field(..., description="Currency code (e.g., USD, EUR)")
    initial: int = Field(..., ge=0, description="Pre-discount price")
    final: int = Field(..., ge=0, description="Post-discount price")
    discount_percent: int = Field(..., ge=0, le=100, description="Discount percentage")

    @property
    def initial_amount(self) -> Decimal:
        """Pre-discount price in major currency units."""
        return Decimal(self.initial) / 100

    @property
    def final_amount(self) -> Decimal:
        """Post-discount price in major currency units."""
        return Decimal(self.final) / 100


class AppPrice(Price):
    """
    Application price.

    The app ID is not part of the upstream object; the client
    stamps it from the key the price was returned under.
    """

    app_id: int = Field(default=0, description="Steam application ID")
    initial_formatted: str = Field(default="", description="Formatted pre-discount price")
    final_formatted: str = Field(default="", description="Formatted post-discount price")


class PackagePrice(Price):
    """Package price, with the sum of the individual app prices."""

    individual: int = Field(..., ge=0, description="Price of contained apps bought separately")


class PriceOverview(StoreModel):
    """Payload of appdetails when filtered to price_overview."""

    price_overview: AppPrice


class FeaturedItem(StoreModel):
    """Item on a featured list."""

    app_id: int = Field(..., alias="id")
    type: int
    name: str
    discounted: bool
    discount_percent: int = Field(..., ge=0, le=100)
    original_price: int | None = Field(default=None, description="Pre-discount price")
    final_price: int = Field(..., description="Post-discount price")
    currency: str
    large_capsule_image: str
    small_capsule_image: str
    windows_available: bool
    mac_available: bool
    linux_available: bool
    streamingvideo_available: bool
    discount_expiration: int | None = Field(
        default=None, description="Unix timestamp when the discount expires"
    )
    header_image: str
    controller_support: str | None = None


class Featured(StatusModel):
    """Featured items per platform."""

    featured_win: list[FeaturedItem] = Field(default_factory=list)
    featured_mac: list[FeaturedItem] = Field(default_factory=list)
    featured_linux: list[FeaturedItem] = Field(default_factory=list)


class FeaturedCategory(StoreModel):
    """A featured category such as Specials or Top Sellers."""

    id: str
    name: str
    items: list[FeaturedItem] | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Numbered sections use integer IDs."""
        if isinstance(v, int):
            return str(v)
        return v


class FeaturedCategories(StatusModel):
    """
    Raw featuredcategories body.

    Categories sit next to ``status`` at the top level, so every
    other key is kept as an extra field until the client filters it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    @property
    def payload(self) -> dict[str, Any]:
        return dict(self.model_extra or {})
