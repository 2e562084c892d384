"""Data models for wine-lens."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _drop_missing(value: object) -> object:
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


class GuessedWine(BaseModel):
    """One wine as guessed by the extraction model."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str | None = None
    year: str | None = None
    price: str | None = None


class Vintage(BaseModel):
    """Year-specific listing of a wine in search results."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | str | None = None
    year: int | float | str | None = None
    name: str | None = None
    seo_name: str | None = None


class SearchHit(BaseModel):
    """One wine entity returned by the search service."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | str | None = None
    name: str | None = None
    seo_name: str | None = None
    vintages: list[Vintage] = Field(default_factory=list)

    @field_validator("vintages", mode="before")
    @classmethod
    def _vintages_default(cls, value: object) -> object:
        return _drop_missing(value)


class SearchResult(BaseModel):
    """Ranked search hits for a single query."""

    model_config = ConfigDict(frozen=True, extra="allow")

    hits: list[SearchHit] = Field(default_factory=list)

    @field_validator("hits", mode="before")
    @classmethod
    def _hits_default(cls, value: object) -> object:
        return _drop_missing(value)
