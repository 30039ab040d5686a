"""Strategy waterfall that turns one page into one event context.

Strategies are tried in a fixed order; the first that yields a context
wins and is tagged with its name:

1. Ticketmaster JSON-LD, then Ticketmaster title (Ticketmaster pages)
2. JSON-LD Event (any site)
3. Embedded JSON deep search (Next.js and friends)
4. Viagogo free text (Viagogo pages)
5. StubHub URL + meta time, overwrite-merged onto the OG/meta result
6. OG/meta smart merge (any site)
7. Terminal fallback: a title and nothing else (never fails)
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable, Optional

from rich.console import Console

from ticket_context.extractors.embedded import extract_from_embedded_json
from ticket_context.extractors.heuristics import extract_og_meta_smart, fallback_extract
from ticket_context.extractors.merge import merge_overwrite
from ticket_context.extractors.page import Page
from ticket_context.extractors.platforms import (
    extract_stubhub_time,
    extract_viagogo_smart,
    is_stubhub_page,
    is_ticketmaster_page,
    is_viagogo_page,
    parse_stubhub_url,
    parse_ticketmaster_title,
)
from ticket_context.extractors.structured import extract_from_json_ld
from ticket_context.models import EventContext, ExtractionResult

console = Console()

GET_PAGE_CONTEXT = "GET_PAGE_CONTEXT"


class ExtractionRun:
    """Per-call state shared between strategies."""

    def __init__(self, page: Page):
        self.page = page

    @cached_property
    def og_meta(self) -> Optional[EventContext]:
        # Used by both the StubHub merge and the plain meta strategy
        return extract_og_meta_smart(self.page)


@dataclass(frozen=True)
class Strategy:
    """One named step of the waterfall."""

    name: str
    applies: Callable[[Page], bool]
    extract: Callable[[ExtractionRun], Optional[EventContext]]


def always(page: Page) -> bool:
    return True


def stubhub_merge(run: ExtractionRun) -> Optional[EventContext]:
    """URL-derived fields beat meta text; a meta time fills in the clock."""
    og = run.og_meta
    from_url = parse_stubhub_url(run.page)
    from_time = extract_stubhub_time(run.page)

    merged = merge_overwrite(og, from_url)
    merged = merge_overwrite(merged, from_time)
    return merged or from_url or og


STRATEGIES: tuple[Strategy, ...] = (
    Strategy("ticketmaster_jsonld", is_ticketmaster_page, lambda run: extract_from_json_ld(run.page)),
    Strategy("ticketmaster_title", is_ticketmaster_page, lambda run: parse_ticketmaster_title(run.page.title)),
    Strategy("jsonld_event", always, lambda run: extract_from_json_ld(run.page)),
    Strategy("nextdata_eventlike", always, lambda run: extract_from_embedded_json(run.page)),
    Strategy("viagogo_smart", is_viagogo_page, lambda run: extract_viagogo_smart(run.page)),
    Strategy("stubhub_merge", is_stubhub_page, stubhub_merge),
    Strategy("meta_smart", always, lambda run: run.og_meta),
)

FALLBACK_SOURCE = "fallback"


def run_strategies(
    page: Page,
    strategies: tuple[Strategy, ...] = STRATEGIES,
) -> ExtractionResult:
    """Evaluate strategies in order and return the first hit.

    Never raises: a strategy that blows up is reported and skipped, and the
    terminal fallback always produces a result.
    """
    run = ExtractionRun(page)

    for strategy in strategies:
        try:
            if not strategy.applies(page):
                continue
            context = strategy.extract(run)
        except Exception as e:
            console.print(f"[yellow]Strategy {strategy.name} failed: {type(e).__name__}: {e}[/yellow]")
            continue

        if context is not None:
            return ExtractionResult(ok=True, source=strategy.name, context=context)

    try:
        context = fallback_extract(page)
    except Exception as e:
        console.print(f"[yellow]Fallback failed: {type(e).__name__}: {e}[/yellow]")
        context = EventContext()
    return ExtractionResult(ok=True, source=FALLBACK_SOURCE, context=context)


def extract_context(page: Page) -> ExtractionResult:
    """Extract the event context of an already parsed page."""
    return run_strategies(page)


def extract_page_context(html: Optional[str], url: str = "") -> ExtractionResult:
    """Extract the event context from raw HTML and the page URL."""
    try:
        page = Page.from_html(html, url)
    except Exception as e:
        console.print(f"[yellow]Could not parse page {url}: {type(e).__name__}: {e}[/yellow]")
        page = Page.from_html("", url)
    return extract_context(page)


def handle_message(message: Any, html: Optional[str], url: str = "") -> Optional[dict]:
    """Answer a GET_PAGE_CONTEXT request; other messages get None."""
    if not isinstance(message, dict) or message.get("type") != GET_PAGE_CONTEXT:
        return None

    response = extract_page_context(html, url).to_response()
    console.print(f"[dim]{GET_PAGE_CONTEXT} for {url or '<no url>'}: {response['source']}[/dim]")
    return response
