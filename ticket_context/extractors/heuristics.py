"""Free-text heuristics for event context.

When a page exposes no structured data, its social-preview title and
description usually still read like "Foo Fighters Tickets in Austin, TX
on Nov 2, 2025 at 7:30 pm". These helpers mine such strings.
"""

import re
from typing import Optional

from ticket_context.extractors.merge import merge_fill_missing
from ticket_context.extractors.page import Page
from ticket_context.models import EventContext
from ticket_context.normalizers.dates import (
    parse_month_date_year,
    parse_numeric_date,
    parse_time_12,
)
from ticket_context.normalizers.text import norm_space, strip_trailing_city

# "in Austin, TX"
IN_CITY_STATE_RE = re.compile(r"\bin\s+([A-Za-z .'-]+?),\s*([A-Z]{2})\b")
# "in Austin" up to a stop word or punctuation
IN_CITY_STOP_RE = re.compile(
    r"\bin\s+([A-Za-z .'-]+?)(?:\s+tickets\b|,|\s+on\b|\s+at\b|\s+-|\s+\||$)", re.I
)
# "<anything>, TX" (the last occurrence wins)
CITY_STATE_ANYWHERE_RE = re.compile(r"([^,]+?),\s+([A-Z]{2})\b")


def find_city_state(text: str) -> tuple[Optional[str], Optional[str]]:
    """Locate a venue city (and state) in free text."""
    match = IN_CITY_STATE_RE.search(text)
    if match:
        return norm_space(match.group(1)), match.group(2)

    match = IN_CITY_STOP_RE.search(text)
    if match:
        return norm_space(match.group(1)) or None, None

    # Known limitation: an unrelated trailing ", XX" can win here
    matches = list(CITY_STATE_ANYWHERE_RE.finditer(text))
    if matches:
        last = matches[-1]
        return norm_space(last.group(1)) or None, last.group(2)

    return None, None


def parse_generic_text(text: Optional[str], heading: Optional[str] = None) -> Optional[EventContext]:
    """Parse date, time, city/state and performer from one free-text string.

    heading is the page's first <h1>, used as the performer when the text
    has no "... tickets" prefix.
    """
    t = norm_space(text)
    if not t:
        return None

    date_day = parse_month_date_year(t) or parse_numeric_date(t)
    time_24 = parse_time_12(t)
    city, state = find_city_state(t)

    performer_query = None
    idx_tickets = t.lower().find(" tickets")
    if idx_tickets > 0:
        performer_query = norm_space(t[:idx_tickets])
    elif heading:
        performer_query = norm_space(heading)

    if performer_query and city:
        performer_query = strip_trailing_city(performer_query, city)

    return EventContext(
        raw_title=t,
        performer_query=performer_query or None,
        city=city or None,
        state=state or None,
        date_day=date_day,
        time_24=time_24,
    )


def extract_og_meta_smart(page: Page) -> Optional[EventContext]:
    """Parse og:title, og:description and <title>, earlier sources winning."""
    sources = (page.meta("og:title"), page.meta("og:description"), page.title)

    result = None
    for text in sources:
        if not text:
            continue
        result = merge_fill_missing(result, parse_generic_text(text, page.heading))
    return result


def fallback_extract(page: Page) -> EventContext:
    """Terminal fallback: a title and nothing else. Never fails."""
    raw_title = page.heading or page.meta("og:title") or page.title or None
    return EventContext(raw_title=raw_title)
