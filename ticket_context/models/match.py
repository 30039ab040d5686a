"""Models for the remote /match API contract."""

from typing import Optional, Union

from pydantic import BaseModel, Field

from ticket_context.models.context import EventContext

Price = Union[float, str]


class MatchRequest(BaseModel):
    """Request body sent to /match."""

    performer_query: Optional[str] = None
    raw_title: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    date_day: Optional[str] = None
    time_24: Optional[str] = None
    page_url: Optional[str] = None

    @classmethod
    def from_context(cls, context: EventContext, page_url: Optional[str] = None) -> "MatchRequest":
        return cls(**context.to_match_body(page_url))


class Offer(BaseModel):
    """One priced listing from a marketplace."""

    source: Optional[str] = None  # "geturtix", "tn", "tl", "sbs", ...
    url: Optional[str] = None
    base_price_min: Optional[Price] = None
    est_after_promo: Optional[Price] = None
    promo_percent: Optional[float] = None
    promo_code: Optional[str] = None

    class Config:
        extra = "ignore"


class Match(BaseModel):
    """A matched event with its offers."""

    offers: list[Offer] = Field(default_factory=list)

    class Config:
        extra = "ignore"


class MatchResponse(BaseModel):
    """Response payload from /match."""

    matches: list[Match] = Field(default_factory=list)
    confidence: Optional[Union[float, str]] = None
    reason: Optional[str] = None
    hint: Optional[str] = None

    class Config:
        extra = "ignore"

    @property
    def best_offers(self) -> list[Offer]:
        """Offers of the first match (the one shown to users)."""
        if not self.matches:
            return []
        return self.matches[0].offers
