"""Page → event context extraction engine.

Strategies, each a pure function of the page snapshot:
   - Schema.org JSON-LD Event objects
   - Deep search of embedded JSON (framework hydration payloads)
   - Marketplace-specific parsers (Ticketmaster title, StubHub URL slug,
     Viagogo free text)
   - Generic OG/meta free-text heuristics
combined by a fixed-priority waterfall with a terminal fallback.
"""

from ticket_context.extractors.embedded import deep_find_first, extract_from_embedded_json
from ticket_context.extractors.heuristics import (
    extract_og_meta_smart,
    fallback_extract,
    parse_generic_text,
)
from ticket_context.extractors.merge import is_present, merge_fill_missing, merge_overwrite
from ticket_context.extractors.page import Page
from ticket_context.extractors.pipeline import (
    STRATEGIES,
    Strategy,
    extract_context,
    extract_page_context,
    handle_message,
)
from ticket_context.extractors.structured import extract_from_json_ld

__all__ = [
    "Page",
    "STRATEGIES",
    "Strategy",
    "deep_find_first",
    "extract_context",
    "extract_from_embedded_json",
    "extract_from_json_ld",
    "extract_og_meta_smart",
    "extract_page_context",
    "fallback_extract",
    "handle_message",
    "is_present",
    "merge_fill_missing",
    "merge_overwrite",
    "parse_generic_text",
]
