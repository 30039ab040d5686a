"""Event context models returned by the extraction engine."""

import re
from typing import Any, Optional

from pydantic import BaseModel, field_validator

# Fields combined by the merge policies (venue_name is carried, never merged)
CONTEXT_FIELDS = (
    "raw_title",
    "performer_query",
    "city",
    "state",
    "date_day",
    "time_24",
)

DATE_DAY_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")
TIME_24_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class EventContext(BaseModel):
    """Normalized performer/venue/date/time record extracted from a page."""

    raw_title: Optional[str] = None
    performer_query: Optional[str] = None  # Search term for the performing act
    city: Optional[str] = None
    state: Optional[str] = None  # 2-letter code when present
    date_day: Optional[str] = None  # "2025-11-02"
    time_24: Optional[str] = None  # "19:30"
    venue_name: Optional[str] = None

    class Config:
        extra = "ignore"

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("date_day")
    @classmethod
    def _check_date_day(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not DATE_DAY_RE.match(value):
            return None
        return value

    @field_validator("time_24")
    @classmethod
    def _check_time_24(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not TIME_24_RE.match(value):
            return None
        return value

    def is_empty(self) -> bool:
        """True when no field carries a non-blank value."""
        return not any((v or "").strip() for v in self.model_dump().values())

    def to_match_body(self, page_url: Optional[str] = None) -> dict:
        """Build the JSON body posted to the /match endpoint."""
        return {
            "performer_query": self.performer_query or None,
            "raw_title": self.raw_title or None,
            "city": self.city or None,
            "state": self.state or None,
            "date_day": self.date_day or None,
            "time_24": self.time_24 or None,
            "page_url": page_url or None,
        }


class ExtractionResult(BaseModel):
    """Context plus the tag of the strategy that produced it."""

    ok: bool = True
    source: str
    context: EventContext

    def to_response(self) -> dict:
        """Plain dict in the GET_PAGE_CONTEXT response shape."""
        return {
            "ok": self.ok,
            "source": self.source,
            "context": self.context.model_dump(),
        }
