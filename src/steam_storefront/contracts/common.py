"""
Shared building blocks for Steam Store API contracts.
"""

from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class StoreModel(BaseModel):
    """
    Base class for every decoded store record.

    Records are immutable once decoded. Fields renamed from the
    upstream JSON keep their upstream key as alias and can also be
    populated by field name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def empty_as_none(v: Any) -> Any:
    """
    Treat an empty container as a missing value.

    The store sends ``[]`` or ``{}`` instead of omitting some objects.
    """
    if isinstance(v, list | dict) and not v:
        return None
    return v


class DataEnvelope(StoreModel, Generic[T]):
    """
    Per-item envelope of the ID-keyed endpoints.

    The store returns {id: {success: bool, data: {...}}}.
    """

    success: bool
    data: T | None = None

    @field_validator("data", mode="before")
    @classmethod
    def empty_data(cls, v: Any) -> Any:
        """Entries without data may come back as ``"data": []``."""
        return empty_as_none(v)

    @property
    def is_successful(self) -> bool:
        return self.success

    @property
    def payload(self) -> T | None:
        return self.data


class StatusModel(StoreModel):
    """
    Record that carries its own integer status flag (1 = success).

    The record itself is the payload unless a subclass says otherwise.
    """

    status_key: ClassVar[str] = "status"

    status: int = Field(..., exclude=True, description="Result code (1 = success)")

    @property
    def is_successful(self) -> bool:
        return self.status == 1

    @property
    def payload(self) -> Any:
        return self


class Language(str, Enum):
    """Languages supported by the Steam store, valued by their wire token."""

    ALL = "all"
    ARABIC = "arabic"
    BULGARIAN = "bulgarian"
    SCHINESE = "schinese"
    TCHINESE = "tchinese"
    CZECH = "czech"
    DANISH = "danish"
    DUTCH = "dutch"
    ENGLISH = "english"
    FINNISH = "finnish"
    FRENCH = "french"
    GERMAN = "german"
    GREEK = "greek"
    HUNGARIAN = "hungarian"
    INDONESIAN = "indonesian"
    ITALIAN = "italian"
    JAPANESE = "japanese"
    KOREANA = "koreana"
    NORWEGIAN = "norwegian"
    POLISH = "polish"
    PORTUGUESE = "portuguese"
    BRAZILIAN = "brazilian"
    ROMANIAN = "romanian"
    RUSSIAN = "russian"
    SPANISH = "spanish"
    LATAM = "latam"
    SWEDISH = "swedish"
    THAI = "thai"
    TURKISH = "turkish"
    UKRAINIAN = "ukrainian"
    VIETNAMESE = "vietnamese"


class Platforms(StoreModel):
    """Platform availability."""

    windows: bool = Field(default=False)
    mac: bool = Field(default=False)
    linux: bool = Field(default=False)


class ReleaseDate(StoreModel):
    """Release date information."""

    coming_soon: bool | None = Field(default=None, description="Not yet released")
    date: str | None = Field(default=None, description="Release date string")
    steam: str | None = Field(default=None, description="Steam release date string")
