"""
Review query filter and cursor pagination.

A ReviewsFilter is encoded into the appreviews query string. After
each page the caller (or Steam.review_pages) calls ``advance`` with
the page, which feeds the returned cursor back into the filter and
tells whether another page should be requested.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from steam_storefront.contracts import Language, Reviews

MAX_REVIEWS_PER_PAGE = 100
MAX_DAY_RANGE = 365
DEFAULT_REVIEWS_PER_PAGE = 20


def clamp(value: int, cap: int) -> int:
    """
    Cap a requested value at the endpoint maximum.

    Values above ``cap`` are lowered to it; smaller values pass through.
    """
    return min(value, cap)


class ReviewFilter(str, Enum):
    """Review ordering."""

    # by helpfulness, within a sliding window set by day_range
    ALL = "all"
    RECENT = "recent"
    UPDATED = "updated"


class ReviewType(str, Enum):
    """Review sentiment."""

    ALL = "all"
    POSITIVE = "positive"
    NEGATIVE = "negative"


class PurchaseType(str, Enum):
    """Where the reviewer got the product."""

    ALL = "all"
    NON_STEAM_PURCHASE = "nonsteampurchase"
    STEAM = "steam"


class OfftopicActivity(str, Enum):
    """Whether off-topic reviews ("review bombs") are returned."""

    EXCLUDE = "exclude"
    INCLUDE = "include"


class ReviewsFilter(BaseModel):
    """
    Query parameters of the appreviews endpoint.

    The model is mutable: ``cursor`` is rewritten between pages.

    Example:
        >>> review_filter = ReviewsFilter(language=Language.ENGLISH, num_per_page=100)
        >>> page = await steam.reviews(489830, review_filter)
        >>> while review_filter.advance(page):
        ...     page = await steam.reviews(489830, review_filter)
    """

    model_config = ConfigDict(validate_assignment=True)

    filter: ReviewFilter | None = None
    review_type: ReviewType | None = None
    purchase_type: PurchaseType | None = None
    language: Language | None = None
    day_range: int | None = Field(
        default=None,
        ge=0,
        description="Days back to look for helpful reviews; only used by the 'all' filter",
    )
    cursor: str | None = Field(
        default=None,
        description="Opaque cursor returned by the previous page; None starts from the top",
    )
    num_per_page: int | None = Field(
        default=None,
        ge=0,
        description="Reviews per page (store default 20)",
    )
    offtopic_activity: OfftopicActivity = OfftopicActivity.EXCLUDE

    @property
    def page_size(self) -> int:
        """Number of reviews a full page holds for this filter."""
        if self.num_per_page is None:
            return DEFAULT_REVIEWS_PER_PAGE
        return clamp(self.num_per_page, MAX_REVIEWS_PER_PAGE)

    def to_params(self) -> list[tuple[str, str]]:
        """Encode the filter as ordered query parameters."""
        params: list[tuple[str, str]] = [("json", "1")]

        if self.cursor is not None:
            params.append(("cursor", self.cursor))
        if self.filter is not None:
            params.append(("filter", self.filter.value))
        if self.language is not None:
            params.append(("language", self.language.value))
        if self.review_type is not None:
            params.append(("review_type", self.review_type.value))
        if self.purchase_type is not None:
            params.append(("purchase_type", self.purchase_type.value))
        if self.day_range is not None:
            params.append(("day_range", str(clamp(self.day_range, MAX_DAY_RANGE))))
        if self.num_per_page is not None:
            params.append(("num_per_page", str(self.page_size)))

        if self.offtopic_activity is OfftopicActivity.INCLUDE:
            params.append(("filter_offtopic_activity", "0"))

        return params

    def has_more(self, page: Reviews) -> bool:
        """
        Tell whether another page follows ``page``.

        A page shorter than the page size is the last one, and so is a
        page that hands back the cursor it was requested with.
        """
        if self.page_size == 0 or page.query_summary.num_reviews < self.page_size:
            return False
        return page.cursor != self.cursor

    def advance(self, page: Reviews) -> bool:
        """
        Move the filter past ``page``.

        Returns:
            bool: True if the cursor was updated and the next page should
            be requested, False once pagination is exhausted
        """
        if not self.has_more(page):
            return False
        self.cursor = page.cursor
        return True
