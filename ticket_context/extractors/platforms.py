"""Marketplace-specific extractors (Ticketmaster, StubHub, Viagogo)."""

import re
from typing import Optional

from ticket_context.extractors.page import Page
from ticket_context.models import EventContext
from ticket_context.normalizers.dates import (
    MONTH_DATE_RE,
    MONTH_NAME_PATTERN,
    format_day,
    month_number,
    parse_month_date_year,
    parse_time_12,
)
from ticket_context.normalizers.text import (
    append_venue,
    norm_space,
    strip_tickets_word,
    strip_trailing_city,
    title_case_slug,
)

# How much body text the time / free-text scans look at
STUBHUB_BODY_CHARS = 8000
VIAGOGO_BODY_CHARS = 12000


def is_ticketmaster_page(page: Page) -> bool:
    """Ticketmaster host, or a title that names Ticketmaster (resale mirrors)."""
    return "ticketmaster." in page.host or "ticketmaster" in page.title.lower()


def is_stubhub_page(page: Page) -> bool:
    return "stubhub." in page.host


def is_viagogo_page(page: Page) -> bool:
    return "viagogo." in page.host


# =============================================================================
# Ticketmaster: "<Performer> Tickets | Mar 5, 2026 Los Angeles, CA | Ticketmaster"
# =============================================================================

TM_DATE_CITY_STATE_RE = re.compile(
    rf"\b(?i:{MONTH_NAME_PATTERN})\b\s+\d{{1,2}},\s+\d{{4}}\s+(.+?),\s+([A-Z]{{2}})\b"
)
TM_TRAILING_CITY_STATE_RE = re.compile(r"(.+?),\s+([A-Z]{2})\s*$")


def _title_location(segment: str) -> tuple[Optional[str], Optional[str]]:
    match = TM_DATE_CITY_STATE_RE.search(segment) or TM_TRAILING_CITY_STATE_RE.search(segment)
    if not match:
        return None, None
    return norm_space(match.group(1)) or None, match.group(2)


def parse_ticketmaster_title(title: Optional[str]) -> Optional[EventContext]:
    """Parse performer, date and city/state out of a page title.

    The left "|" segment is read first; later segments are only consulted
    for fields the left one lacks.
    """
    t = norm_space(title)
    if not t:
        return None

    segments = [norm_space(s) for s in t.split("|")]
    left = segments[0]

    city = state = None
    for segment in segments:
        city, state = _title_location(segment)
        if city:
            break

    date_day = None
    date_match = None
    for index, segment in enumerate(segments):
        date_match = MONTH_DATE_RE.search(segment)
        if date_match:
            month = month_number(date_match.group(1))
            date_day = format_day(date_match.group(3), month, date_match.group(2)) if month else None
            if index > 0:
                date_match = None
            break

    performer_query = None
    idx_tickets = left.lower().find(" tickets ")
    if idx_tickets > 0:
        performer_query = norm_space(left[:idx_tickets])
    elif date_match and date_match.start() > 0:
        performer_query = norm_space(left[: date_match.start()])
    elif date_day and len(segments) > 1:
        # Date lives in a later segment, so the whole left segment is the act
        performer_query = strip_tickets_word(left) or None

    return EventContext(
        raw_title=t,
        performer_query=performer_query or None,
        city=city,
        state=state,
        date_day=date_day,
    )


# =============================================================================
# StubHub: /foo-fighters-austin-tickets-11-2-2025/event/123
# =============================================================================

STUBHUB_PATH_RE = re.compile(r"-tickets-(\d{1,2})-(\d{1,2})-(\d{4})/event/\d+", re.I)

# First word of common two-word cities (las-vegas, san-diego, fort-worth...)
MULTI_CITY_STARTERS = frozenset({
    "las", "el", "los", "san", "santa", "new", "fort", "ft", "st", "saint",
    "port", "palm", "glen", "grand", "little", "cedar", "rapid", "salt", "sioux",
})

# Directional / qualifier first words (east-rutherford, north-charleston...)
CITY_FIRST_WORDS = frozenset({"east", "west", "north", "south", "upper", "lower", "old", "new"})

# Second word of two-word cities (ann-arbor, vero-beach, palm-springs...)
CITY_SECOND_WORDS = frozenset({
    "arbor", "rutherford", "beach", "springs", "heights", "falls", "rapids", "lake",
    "valley", "park", "grove", "hills", "harbor", "harbour", "mesa", "vista",
    "mont", "mount", "junction", "station", "center", "centre", "bay", "point",
    "island", "ridge", "town", "city",
})


def split_slug_performer_city(parts: list[str]) -> tuple[Optional[str], Optional[str]]:
    """Split slug tokens into (performer_slug, city_slug).

    Heuristics, first match wins:
    1. salt-lake-city / salt-lake
    2. three-token "...-city" after a starter or directional (new-york-city)
    3. two-word city led by a known starter (las-vegas)
    4. two-word city led by a directional (east-rutherford)
    5. two-word city ending in a common suffix (palm-springs, oklahoma-city)
    6. single trailing token
    """
    if not parts or len(parts) < 2:
        return None, None

    n = len(parts)

    def split_at(k: int) -> tuple[Optional[str], Optional[str]]:
        return "-".join(parts[: n - k]) or None, "-".join(parts[n - k:])

    if n >= 4 and parts[n - 3:] == ["salt", "lake", "city"]:
        return split_at(3)
    if parts[n - 2:] == ["salt", "lake"]:
        return split_at(2)

    if (
        n >= 4
        and parts[n - 1] == "city"
        and (parts[n - 3] in MULTI_CITY_STARTERS or parts[n - 3] in CITY_FIRST_WORDS)
    ):
        return split_at(3)

    if parts[n - 2] in MULTI_CITY_STARTERS:
        return split_at(2)

    if parts[n - 2] in CITY_FIRST_WORDS:
        return split_at(2)

    if parts[n - 1] in CITY_SECOND_WORDS:
        return split_at(2)

    return split_at(1)


def parse_stubhub_url(page: Page) -> Optional[EventContext]:
    """Date, performer and city encoded in a StubHub event path."""
    match = STUBHUB_PATH_RE.search(page.path)
    if not match:
        return None

    month, day, year = match.groups()
    date_day = format_day(year, month, day)

    # Last path segment before "-tickets-" is the performer+city slug
    slug = page.path.split("-tickets-")[0].rsplit("/", 1)[-1]
    parts = [p for p in slug.lower().split("-") if p]

    performer_query = city = None
    performer_slug, city_slug = split_slug_performer_city(parts)
    if performer_slug:
        performer_query = title_case_slug(performer_slug) or None
    if city_slug:
        city = title_case_slug(city_slug) or None

    return EventContext(
        raw_title=page.title or None,
        performer_query=performer_query,
        city=city,
        date_day=date_day,
    )


def extract_stubhub_time(page: Page) -> Optional[EventContext]:
    """Show time from meta tags or the top of the body, when the URL has none."""
    text = " | ".join(
        s
        for s in (
            page.meta("og:title"),
            page.meta("og:description"),
            page.meta("description"),
            page.title,
            page.body_text[:STUBHUB_BODY_CHARS],
        )
        if s
    )

    time_24 = parse_time_12(text)
    if not time_24:
        return None
    return EventContext(time_24=time_24)


# =============================================================================
# Viagogo: "... at Moody Center in Austin, TX on Nov 2, 2025 7:30 PM"
# =============================================================================

VG_IN_CITY_STATE_RE = re.compile(r"\bin\s+([A-Za-z .'-]+?),\s*([A-Z]{2})\b")
VG_AT_VENUE_RE = re.compile(r"\bat\s+(.+?)\s+\bin\s+[A-Za-z .'-]+?,\s*[A-Z]{2}\b", re.I)


def parse_viagogo_text(text: Optional[str]) -> Optional[EventContext]:
    """Date, time, city/state and venue from Viagogo meta/body text."""
    t = norm_space(text)
    if not t:
        return None

    date_day = parse_month_date_year(t)
    time_24 = parse_time_12(t)

    city = state = None
    match = VG_IN_CITY_STATE_RE.search(t)
    if match:
        city = norm_space(match.group(1)) or None
        state = match.group(2)

    venue = None
    match = VG_AT_VENUE_RE.search(t)
    if match:
        venue = norm_space(match.group(1)) or None

    if not any((city, date_day, time_24, venue)):
        return None
    return EventContext(city=city, state=state, date_day=date_day, time_24=time_24, venue_name=venue)


def extract_viagogo_smart(page: Page) -> Optional[EventContext]:
    """Viagogo meta/text fallback for pages without hydration data."""
    og_title = page.meta("og:title") or ""
    big_text = " | ".join(
        s
        for s in (
            page.meta("og:description"),
            page.meta("description"),
            page.meta("twitter:description"),
            og_title,
            page.title,
            page.body_text[:VIAGOGO_BODY_CHARS],
        )
        if s
    )

    parsed = parse_viagogo_text(big_text)
    if not parsed:
        return None

    performer_query = (
        strip_tickets_word(page.heading)
        or strip_tickets_word(og_title)
        or strip_tickets_word(page.title)
        or None
    )
    if performer_query and parsed.city:
        performer_query = strip_trailing_city(performer_query, parsed.city)
    performer_query = append_venue(performer_query, parsed.venue_name)

    return parsed.model_copy(update={
        "raw_title": norm_space(og_title) or page.title or performer_query or None,
        "performer_query": performer_query or None,
    })
