from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# The source data writes "0" for a locality it does not provide.
LOCALITY_SENTINEL = "0"


def is_unresolved_locality(value: str | None) -> bool:
    return value is None or value in ("", LOCALITY_SENTINEL)


class _SourceModel(BaseModel):
    """Structured-data entries come from third-party JSON-LD: accept numbers
    where strings are expected and treat ``null`` as an empty string."""

    model_config = ConfigDict(coerce_numbers_to_str=True)


class Address(_SourceModel):
    streetAddress: str = ""
    postalCode: str = ""
    addressLocality: str = ""
    addressRegion: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class AggregateRating(_SourceModel):
    reviewCount: str | None = None
    ratingValue: str | None = None
    worstRating: str | None = None
    bestRating: str | None = None


class DomainRecord(_SourceModel):
    url: str
    name: str = ""
    logo: str = ""
    image: str = ""
    address: Address = Field(default_factory=Address)
    aggregateRating: AggregateRating | None = None

    @field_validator("logo", "name", "image", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("address", mode="before")
    @classmethod
    def _missing_address(cls, v):
        return v if isinstance(v, (dict, Address)) else {}

    @field_validator("aggregateRating", mode="before")
    @classmethod
    def _drop_malformed_rating(cls, v):
        return v if isinstance(v, (dict, AggregateRating)) else None

    @field_validator("url")
    @classmethod
    def _url_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("url must not be empty")
        return v


class ListingInfo(BaseModel):
    name: str
    url: str
    city: str
    region: str
    postalCode: str


class CapacityRange(BaseModel):
    min: int
    max: int

    @model_validator(mode="after")
    def _check_bounds(self) -> CapacityRange:
        if self.min < 0:
            raise ValueError("min must be >= 0")
        if self.max < self.min:
            raise ValueError("max must be >= min")
        return self


class CompleteListing(ListingInfo):
    type: str
    capacity: CapacityRange | None = None

    @property
    def min(self) -> int | None:
        return self.capacity.min if self.capacity else None

    @property
    def max(self) -> int | None:
        return self.capacity.max if self.capacity else None


class ScrapeResult(BaseModel):
    listings: list[CompleteListing] = []
    pages_requested: int = 0
    pages_failed: int = 0
    unresolved_city: int = 0
    unresolved_capacity: int = 0
