"""Extract event context from Schema.org JSON-LD."""

import json
import re
from typing import Any, Optional

from ticket_context.extractors.page import Page
from ticket_context.models import EventContext
from ticket_context.normalizers.dates import parse_iso_datetime
from ticket_context.normalizers.location import parse_city_state
from ticket_context.normalizers.text import norm_space, strip_trailing_city

EVENT_TYPE_RE = re.compile(r"event", re.I)

PERFORMER_KEYS = ("performer", "performers", "artist")
START_KEYS = ("startDate", "start_date", "dateTime", "datetime")


def parse_json(text: Optional[str]) -> Any:
    """json.loads that returns None instead of raising."""
    if not text:
        return None
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError, RecursionError):
        return None


def first_value(obj: dict, keys: tuple[str, ...]) -> Any:
    """First truthy value among several aliased keys."""
    for key in keys:
        value = obj.get(key)
        if value:
            return value
    return None


def collect_json_ld(page: Page) -> list[Any]:
    """Parse every ld+json block on the page, flattening top-level arrays."""
    blocks = []

    for payload in page.scripts("application/ld+json"):
        data = parse_json(payload)
        if data is None:
            continue
        if isinstance(data, list):
            blocks.extend(data)
        else:
            blocks.append(data)

    return blocks


def is_event_object(obj: Any) -> bool:
    """True when @type (string or list) mentions "event" in any casing."""
    if not isinstance(obj, dict):
        return False
    block_type = obj.get("@type")
    if not block_type:
        return False
    if isinstance(block_type, list):
        return any(EVENT_TYPE_RE.search(str(t)) for t in block_type)
    return bool(EVENT_TYPE_RE.search(str(block_type)))


def find_event_object(obj: Any) -> Optional[dict]:
    """The object itself if it is an Event, else the first Event in its @graph."""
    if is_event_object(obj):
        return obj
    if isinstance(obj, dict) and isinstance(obj.get("@graph"), list):
        for node in obj["@graph"]:
            if is_event_object(node):
                return node
    return None


def pick_performer_name(performer: Any) -> Optional[str]:
    """Name from a performer string, object, or list (first non-empty wins)."""
    if not performer:
        return None
    if isinstance(performer, str):
        return norm_space(performer) or None
    if isinstance(performer, list):
        for item in performer:
            name = pick_performer_name(item)
            if name:
                return name
        return None
    if isinstance(performer, dict):
        return norm_space(performer.get("name")) or None
    return None


def pick_address(location: Any) -> Optional[tuple[str, Optional[str]]]:
    """(city, state) from a Place-like object or a plain location string."""
    if not location:
        return None

    if isinstance(location, str):
        city, state = parse_city_state(location)
        return (city, state) if city else None

    if not isinstance(location, dict):
        return None

    address = location.get("address")
    if isinstance(address, str):
        city, state = parse_city_state(address)
        if city:
            return city, state
    elif isinstance(address, dict):
        city = address.get("addressLocality") or address.get("addressCity")
        if isinstance(city, str) and norm_space(city):
            return norm_space(city), norm_space(address.get("addressRegion")) or None

    return None


def extract_from_event_json_ld(page: Page, event: Any) -> Optional[EventContext]:
    """Build a context from one Schema.org Event object."""
    if not isinstance(event, dict):
        return None

    raw_title = (
        norm_space(event.get("name"))
        or norm_space(page.meta("og:title"))
        or page.title
        or None
    )

    performer_query = pick_performer_name(first_value(event, PERFORMER_KEYS))
    date_day, time_24 = parse_iso_datetime(first_value(event, START_KEYS))

    # Multi-location events list several Places; the first with a city wins
    city = state = None
    location = event.get("location")
    candidates = location if isinstance(location, list) else [location]
    for candidate in candidates:
        found = pick_address(candidate)
        if found:
            city, state = found
            break

    if not performer_query and raw_title and city:
        performer_query = strip_trailing_city(raw_title, city)

    if not any((raw_title, performer_query, city, date_day, time_24)):
        return None

    return EventContext(
        raw_title=raw_title,
        performer_query=performer_query or None,
        city=city,
        state=state,
        date_day=date_day,
        time_24=time_24,
    )


def extract_from_json_ld(page: Page) -> Optional[EventContext]:
    """First usable Event context among the page's JSON-LD blocks."""
    for block in collect_json_ld(page):
        event = find_event_object(block)
        if not event:
            continue
        context = extract_from_event_json_ld(page, event)
        if context:
            return context
    return None
