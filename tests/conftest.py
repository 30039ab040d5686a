"""Shared test fixtures and configuration."""

import json
from html import escape
from typing import Any, Callable, Optional

import pytest

from ticket_context.extractors.page import Page


def _script(payload: Any, script_type: str, element_id: Optional[str] = None) -> str:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    id_attr = f' id="{element_id}"' if element_id else ""
    return f'<script type="{script_type}"{id_attr}>{text}</script>'


def build_html(
    title: Optional[str] = None,
    meta: Optional[dict[str, str]] = None,
    h1: Optional[str] = None,
    json_ld: tuple = (),
    json_scripts: tuple = (),
    next_data: Any = None,
    body: str = "",
) -> str:
    """Assemble a minimal HTML document from its extractable parts."""
    head = []
    if title is not None:
        head.append(f"<title>{escape(title)}</title>")
    for name, content in (meta or {}).items():
        attr = "property" if name.startswith("og:") else "name"
        head.append(f'<meta {attr}="{name}" content="{escape(content)}">')
    head.extend(_script(block, "application/ld+json") for block in json_ld)

    parts = []
    if h1 is not None:
        parts.append(f"<h1>{escape(h1)}</h1>")
    if body:
        parts.append(f"<p>{escape(body)}</p>")
    if next_data is not None:
        parts.append(_script(next_data, "application/json", "__NEXT_DATA__"))
    parts.extend(_script(blob, "application/json") for blob in json_scripts)

    return f"<html><head>{''.join(head)}</head><body>{''.join(parts)}</body></html>"


@pytest.fixture
def html_builder() -> Callable[..., str]:
    """Build an HTML document from title/meta/h1/script parts."""
    return build_html


@pytest.fixture
def make_page() -> Callable[..., Page]:
    """Build a Page snapshot; takes build_html kwargs plus url."""
    def factory(url: str = "https://example.com/event", **kwargs) -> Page:
        return Page.from_html(build_html(**kwargs), url)

    return factory


@pytest.fixture
def acme_event() -> dict:
    """Schema.org Event used across JSON-LD tests."""
    return {
        "@context": "https://schema.org",
        "@type": "Event",
        "name": "Foo Fighters at Acme Arena",
        "startDate": "2025-11-02T19:30:00",
        "location": {
            "@type": "Place",
            "name": "Acme Arena",
            "address": {"addressLocality": "Austin", "addressRegion": "TX"},
        },
    }
