"""Deep search of embedded JSON (e.g. Next.js hydration payloads) for events.

Marketplaces built on page frameworks ship their event data inside
<script type="application/json"> blobs, nested under keys nobody
documents. Rather than knowing the path, we walk the whole tree and take
the first object that looks like an event: a name-like string and a
date-like string side by side.
"""

from typing import Any, Callable, Optional

from ticket_context.extractors.page import Page
from ticket_context.extractors.structured import parse_json
from ticket_context.models import EventContext
from ticket_context.normalizers.dates import (
    parse_iso_datetime,
    parse_month_date_year,
    parse_numeric_date,
    parse_time_12,
)
from ticket_context.normalizers.location import parse_city_state
from ticket_context.normalizers.text import (
    append_venue,
    norm_space,
    strip_tickets_word,
    strip_trailing_city,
)

# Tiny blobs (feature flags, i18n keys) are not worth parsing
MIN_PAYLOAD_LENGTH = 80
# Upper bound on container nodes visited per payload
MAX_NODES = 200_000

NAME_KEYS = ("name", "title", "eventName", "event_name")
DATE_KEYS = ("startDate", "dateTime", "datetime", "eventDateTime", "eventDate", "event_date")

EVENT_NAME_KEYS = NAME_KEYS + ("performanceName",)
START_KEYS = (
    "startDate",
    "start_date",
    "dateTime",
    "datetime",
    "eventDateTime",
    "event_date_time",
    "eventDate",
    "event_date",
)
VENUE_NAME_PATHS = (
    ("venueName",),
    ("venue_name",),
    ("venue", "name"),
    ("location", "name"),
    ("place", "name"),
)
CITY_PATHS = (
    ("city",),
    ("venueCity",),
    ("venue_city",),
    ("locationCity",),
    ("location_city",),
    ("address", "city"),
    ("address", "addressLocality"),
    ("location", "address", "addressLocality"),
    ("location", "address", "addressCity"),
    ("venue", "address", "addressLocality"),
)
STATE_PATHS = (
    ("state",),
    ("region",),
    ("venueState",),
    ("venue_state",),
    ("address", "state"),
    ("address", "addressRegion"),
    ("location", "address", "addressRegion"),
    ("venue", "address", "addressRegion"),
)
LOCATION_STRING_KEYS = ("location", "venue")
ADDRESS_STRING_KEYS = ("address", "formattedAddress", "venueAddress")


def deep_find_first(root: Any, predicate: Callable[[Any], bool]) -> Optional[Any]:
    """Depth-first, pre-order search for the first container matching predicate.

    Only dicts and lists are visited (scalars are leaves). Each container is
    visited once, keyed by identity, and the walk stops after MAX_NODES
    containers, so shared or self-referencing structures always terminate.
    """
    seen: set[int] = set()
    stack = [root]

    while stack:
        node = stack.pop()
        if not isinstance(node, (dict, list)):
            continue
        if id(node) in seen:
            continue
        seen.add(id(node))
        if len(seen) > MAX_NODES:
            return None

        if predicate(node):
            return node

        children = node.values() if isinstance(node, dict) else node
        # Reversed so the first child is popped first
        stack.extend(reversed(list(children)))

    return None


def dig(obj: Any, path: tuple[str, ...]) -> Any:
    """obj[a][b]... or None when any step is missing or not a dict."""
    for key in path:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def first_string(obj: dict, keys: tuple[str, ...]) -> Optional[str]:
    """The first truthy value among keys, if it is a string."""
    for key in keys:
        value = obj.get(key)
        if value:
            return value if isinstance(value, str) else None
    return None


def first_path_string(obj: dict, paths: tuple[tuple[str, ...], ...]) -> Optional[str]:
    for path in paths:
        value = dig(obj, path)
        if value:
            return value if isinstance(value, str) else None
    return None


def is_event_like(node: Any) -> bool:
    """A dict exposing both a name-like and a date-like string."""
    if not isinstance(node, dict):
        return False
    return first_string(node, NAME_KEYS) is not None and first_string(node, DATE_KEYS) is not None


def extract_event_fields(page: Page, event: Any) -> Optional[EventContext]:
    """Pull context fields out of an event-like object, trying many aliases."""
    if not isinstance(event, dict):
        return None

    name = norm_space(first_string(event, EVENT_NAME_KEYS))
    venue_name = norm_space(first_path_string(event, VENUE_NAME_PATHS)) or None
    start = first_string(event, START_KEYS)

    city = norm_space(first_path_string(event, CITY_PATHS)) or None
    state = norm_space(first_path_string(event, STATE_PATHS)) or None

    # Sometimes the location is a single string like "El Paso, TX"
    location_str = next(
        (event[k] for k in LOCATION_STRING_KEYS if isinstance(event.get(k), str)), None
    )
    if not city and location_str:
        parsed_city, parsed_state = parse_city_state(location_str)
        if parsed_city:
            city, state = parsed_city, parsed_state or state

    address_str = next(
        (event[k] for k in ADDRESS_STRING_KEYS if isinstance(event.get(k), str)), None
    )
    if not city and address_str:
        parsed_city, parsed_state = parse_city_state(address_str)
        if parsed_city:
            city, state = parsed_city, parsed_state or state

    date_day, time_24 = parse_iso_datetime(start)
    if start and not date_day:
        date_day = parse_month_date_year(start) or parse_numeric_date(start)
    if start and not time_24:
        time_24 = parse_time_12(start)

    context = EventContext(
        raw_title=name or norm_space(page.meta("og:title")) or page.title or None,
        performer_query=name or None,
        city=city,
        state=state,
        date_day=date_day,
        time_24=time_24,
        venue_name=venue_name,
    )

    if not any(
        (context.performer_query, context.city, context.date_day, context.time_24, venue_name)
    ):
        return None
    return context


def candidate_payloads(page: Page) -> list[str]:
    """__NEXT_DATA__ first, then every application/json script (deduplicated)."""
    tags = []
    next_data = page.soup.find("script", attrs={"id": "__NEXT_DATA__"})
    if next_data:
        tags.append(next_data)
    for tag in page.soup.find_all("script", attrs={"type": "application/json"}):
        if not any(tag is seen for seen in tags):
            tags.append(tag)
    return [tag.get_text().strip() for tag in tags]


def extract_from_embedded_json(page: Page) -> Optional[EventContext]:
    """First event-like object found in the page's embedded JSON payloads."""
    for payload in candidate_payloads(page):
        if len(payload) < MIN_PAYLOAD_LENGTH:
            continue

        data = parse_json(payload)
        if not isinstance(data, (dict, list)):
            continue

        found = deep_find_first(data, is_event_like)
        if found is None:
            continue

        context = extract_event_fields(page, found)
        if context is None:
            continue

        performer = context.performer_query
        if performer:
            performer = strip_tickets_word(performer) or None
            performer = append_venue(performer, context.venue_name)
            if context.city:
                performer = strip_trailing_city(performer, context.city)

        return context.model_copy(update={"performer_query": performer})

    return None
