"""
Contracts for the appreviews endpoint.

Playtimes are in minutes and timestamps are Unix seconds, as sent.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar

from pydantic import Field, field_validator

from steam_storefront.contracts.common import StoreModel


class QuerySummary(StoreModel):
    """
    Per-page summary.

    Only the first page (no cursor, or cursor ``*``) carries the
    score and the totals; later pages just report ``num_reviews``.
    """

    num_reviews: int = Field(..., ge=0, description="Reviews on this page")
    review_score: int | None = Field(default=None, description="0-9 score bucket")
    review_score_desc: str | None = Field(default=None, examples=["Very Positive"])
    total_positive: int | None = Field(default=None, ge=0)
    total_negative: int | None = Field(default=None, ge=0)
    total_reviews: int | None = Field(default=None, ge=0, description="Reviews matching the filter")


class Author(StoreModel):
    user_id: str = Field(..., alias="steamid", description="SteamID64 of the reviewer")
    num_games_owned: int = 0
    num_reviews: int = 0
    playtime_forever: int = 0
    playtime_last_two_weeks: int = 0
    playtime_at_review: int = 0
    last_played: int = 0


class Review(StoreModel):
    """A single user review."""

    review_id: str = Field(..., alias="recommendationid")
    author: Author
    language: str
    review: str = Field(default="", description="Review body, BBCode as written")
    timestamp_created: int
    timestamp_updated: int
    voted_up: bool = Field(..., description="Recommends the product")
    votes_up: int = Field(default=0, ge=0, description="Found helpful")
    votes_funny: int = Field(default=0, ge=0, description="Found funny")
    weighted_vote_score: str = Field(default="0", description="Helpfulness score, 0 to 1")
    comment_count: int | None = Field(default=None, ge=0)
    steam_purchase: bool = False
    received_for_free: bool = False
    written_during_early_access: bool = False

    @field_validator("weighted_vote_score", mode="before")
    @classmethod
    def coerce_vote_score(cls, v: Any) -> Any:
        """The score arrives either as a string or as a number."""
        if isinstance(v, int | float):
            return str(v)
        return v

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp_created, tz=timezone.utc)

    @property
    def playtime_hours(self) -> float:
        """Hours the author had played when writing the review."""
        return self.author.playtime_at_review / 60


class Reviews(StoreModel):
    """
    One page of reviews.

    ``cursor`` goes into the next request; ``app_id`` is not part of
    the response and is set by the client.
    """

    status_key: ClassVar[str] = "success"

    success: int = Field(..., exclude=True)
    app_id: int = 0
    reviews: list[Review] = Field(default_factory=list)
    query_summary: QuerySummary
    cursor: str

    @property
    def is_successful(self) -> bool:
        return self.success == 1

    @property
    def payload(self) -> "Reviews":
        return self

    @property
    def positive_ratio(self) -> float | None:
        """Share of positive reviews, if this page carries the totals."""
        summary = self.query_summary
        if not summary.total_reviews or summary.total_positive is None:
            return None
        return summary.total_positive / summary.total_reviews
