"""Whitespace, boilerplate and slug helpers shared by every extractor."""

import re
from typing import Any, Optional

SEPARATOR_CHARS = "-–|•,:"


def norm_space(value: Any) -> str:
    """Collapse whitespace runs to single spaces and trim.

    None becomes "", other non-strings are stringified first.
    """
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip()


def strip_trailing_city(performer: Optional[str], city: Optional[str]) -> Optional[str]:
    """Remove a trailing city token (and its separator) from a performer string.

    "Foo Fighters - Austin" + "Austin" -> "Foo Fighters". Returns the input
    unchanged when the city is not at the end or stripping would leave nothing.
    """
    p = norm_space(performer)
    c = norm_space(city)
    if not p or not c:
        return performer

    pattern = re.compile(
        rf"\s*(?:[{re.escape(SEPARATOR_CHARS)}]+\s*)?{re.escape(c)}\s*$", re.I
    )
    if pattern.search(p):
        stripped = norm_space(pattern.sub("", p))
        return stripped or performer
    return performer


def strip_tickets_word(value: Any) -> str:
    """Drop the word "Ticket(s)" and any separator left dangling at the end."""
    text = re.sub(r"\bTickets?\b", "", norm_space(value), flags=re.I)
    text = re.sub(rf"\s*[{re.escape(SEPARATOR_CHARS)}]\s*$", "", text)
    return norm_space(text)


def append_venue(performer: Optional[str], venue: Optional[str]) -> Optional[str]:
    """Append the venue name unless the performer already mentions it."""
    v = norm_space(venue)
    if not performer or not v:
        return performer
    if v.lower() in performer.lower():
        return performer
    return norm_space(f"{performer} {v}")


def title_case_slug(slug: Optional[str]) -> str:
    """Hyphenated slug to words: salt-lake-city -> Salt Lake City."""
    words = [w for w in str(slug or "").split("-") if w]
    return " ".join(w[0].upper() + w[1:] for w in words)
