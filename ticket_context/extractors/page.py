"""Read-only snapshot of a document: parsed DOM plus the page URL."""

from functools import cached_property
from typing import Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction

from ticket_context.normalizers.text import norm_space

# Elements whose text is never visible body text
NON_TEXT_TAGS = {"script", "style", "noscript", "template", "head", "title"}
# Markup strings (comments, doctypes...) that never render
HIDDEN_STRING_TYPES = (Comment, Doctype, CData, ProcessingInstruction, Declaration)


class Page:
    """Everything an extractor may read about the current page.

    Built once per extraction call; extractors never modify it.
    """

    def __init__(self, soup: BeautifulSoup, url: str = ""):
        self.soup = soup
        self.url = url or ""

    @classmethod
    def from_html(cls, html: Optional[str], url: str = "") -> "Page":
        return cls(BeautifulSoup(html or "", "lxml"), url)

    @cached_property
    def host(self) -> str:
        try:
            return (urlparse(self.url).hostname or "").lower()
        except ValueError:
            return ""

    @cached_property
    def path(self) -> str:
        try:
            return urlparse(self.url).path or ""
        except ValueError:
            return ""

    @cached_property
    def title(self) -> str:
        """Document title, whitespace-normalized ("" when missing)."""
        tag = self.soup.find("title")
        return norm_space(tag.get_text()) if tag else ""

    @cached_property
    def heading(self) -> Optional[str]:
        """Text of the first <h1>, or None."""
        h1 = self.soup.find("h1")
        if not h1:
            return None
        return norm_space(h1.get_text(" ")) or None

    @cached_property
    def body_text(self) -> str:
        body = self.soup.body or self.soup
        parts = [
            str(s)
            for s in body.find_all(string=True)
            if isinstance(s, NavigableString)
            and not isinstance(s, HIDDEN_STRING_TYPES)
            and not any(p.name in NON_TEXT_TAGS for p in s.parents if p.name)
        ]
        return norm_space(" ".join(parts))

    def meta(self, name: str) -> Optional[str]:
        """Content of meta[property=name], else meta[name=name]."""
        tag = self.soup.find("meta", attrs={"property": name}) or self.soup.find(
            "meta", attrs={"name": name}
        )
        if not tag:
            return None
        return (tag.get("content") or "").strip() or None

    def scripts(self, script_type: str) -> list[str]:
        """Stripped text payloads of <script type=...> tags, in document order."""
        payloads = []
        for script in self.soup.find_all("script", attrs={"type": script_type}):
            text = script.get_text().strip()
            if text:
                payloads.append(text)
        return payloads
