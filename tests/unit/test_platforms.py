"""Tests for Ticketmaster, StubHub and Viagogo extractors."""

import pytest

from ticket_context.extractors.page import Page
from ticket_context.extractors.platforms import (
    extract_stubhub_time,
    extract_viagogo_smart,
    is_stubhub_page,
    is_ticketmaster_page,
    is_viagogo_page,
    parse_stubhub_url,
    parse_ticketmaster_title,
    parse_viagogo_text,
    split_slug_performer_city,
)

STUBHUB_URL = "https://www.stubhub.com/foo-fighters-austin-tickets-11-2-2025/event/123"


class TestHostDetection:
    """Marketplace detection from host and title."""

    def test_ticketmaster_by_host_or_title(self, make_page):
        """Ticketmaster is recognized by host or by a title naming it."""
        assert is_ticketmaster_page(make_page(url="https://www.ticketmaster.com/event/1"))
        assert is_ticketmaster_page(make_page(title="Foo Fighters | Ticketmaster"))
        assert not is_ticketmaster_page(make_page(title="Foo Fighters"))

    def test_stubhub_and_viagogo(self, make_page):
        """StubHub and Viagogo are recognized by host only."""
        assert is_stubhub_page(make_page(url=STUBHUB_URL))
        assert is_viagogo_page(make_page(url="https://www.viagogo.com/Concert-Tickets/E-1"))
        assert not is_stubhub_page(make_page(url="https://www.viagogo.com/x"))
        assert not is_viagogo_page(make_page(url=STUBHUB_URL))


class TestTicketmasterTitle:
    """Title-string fallback."""

    def test_date_and_location_in_later_segment(self):
        """Date and place after a "|" still parse; the left segment is the act."""
        ctx = parse_ticketmaster_title("Adele | Mar 5, 2026 Los Angeles, CA")
        assert ctx.date_day == "2026-03-05"
        assert (ctx.city, ctx.state) == ("Los Angeles", "CA")
        assert ctx.performer_query == "Adele"
        assert ctx.raw_title == "Adele | Mar 5, 2026 Los Angeles, CA"

    def test_later_segment_performer_loses_tickets_word(self):
        """A left segment used whole as performer drops "Tickets"."""
        ctx = parse_ticketmaster_title("Foo Fighters Tickets | Nov 2, 2025 Austin, TX | Ticketmaster")
        assert ctx.performer_query == "Foo Fighters"
        assert ctx.date_day == "2025-11-02"
        assert (ctx.city, ctx.state) == ("Austin", "TX")

    def test_performer_before_tickets(self):
        """Text before " Tickets " is the performer."""
        ctx = parse_ticketmaster_title("Foo Fighters Tickets Nov 2, 2025 Austin, TX | Ticketmaster")
        assert ctx.performer_query == "Foo Fighters"
        assert ctx.date_day == "2025-11-02"
        assert (ctx.city, ctx.state) == ("Austin", "TX")

    def test_performer_before_date(self):
        """Without "Tickets", text before the date is the performer."""
        ctx = parse_ticketmaster_title("Foo Fighters Nov 2, 2025 Austin, TX")
        assert ctx.performer_query == "Foo Fighters"

    @pytest.mark.parametrize("title,date_day,city,state", [
        ("Foo Fighters March 5, 2026 Los Angeles, CA | Ticketmaster", "2026-03-05", "Los Angeles", "CA"),
        ("Foo Fighters Sept 14, 2026 Austin, TX | Ticketmaster", "2026-09-14", "Austin", "TX"),
        ("Foo Fighters December 31, 2025 New York, NY", "2025-12-31", "New York", "NY"),
        ("Foo Fighters may 9, 2026 Denver, CO", "2026-05-09", "Denver", "CO"),
    ])
    def test_long_and_odd_month_names(self, title: str, date_day: str, city: str, state: str):
        """Full, four-letter and lowercase month names keep the city clean."""
        ctx = parse_ticketmaster_title(title)
        assert ctx.performer_query == "Foo Fighters"
        assert ctx.date_day == date_day
        assert (ctx.city, ctx.state) == (city, state)

    def test_title_without_fields(self):
        """A bare brand title keeps raw_title and nothing else."""
        ctx = parse_ticketmaster_title("Ticketmaster")
        assert ctx.raw_title == "Ticketmaster"
        assert ctx.performer_query is None
        assert ctx.date_day is None

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_empty_title(self, title: str):
        """Empty titles give no context."""
        assert parse_ticketmaster_title(title) is None


class TestSlugSplit:
    """Performer/city split heuristics for StubHub slugs."""

    @pytest.mark.parametrize("parts,expected", [
        (["foo", "fighters", "austin"], ("foo-fighters", "austin")),
        (["chris", "stapleton", "salt", "lake", "city"], ("chris-stapleton", "salt-lake-city")),
        (["chris", "stapleton", "salt", "lake"], ("chris-stapleton", "salt-lake")),
        (["foo", "las", "vegas"], ("foo", "las-vegas")),
        (["giants", "east", "rutherford"], ("giants", "east-rutherford")),
        (["bob", "seger", "ann", "arbor"], ("bob-seger", "ann-arbor")),
        (["thunder", "oklahoma", "city"], ("thunder", "oklahoma-city")),
        (["knicks", "new", "york", "city"], ("knicks", "new-york-city")),
        (["las", "vegas"], (None, "las-vegas")),
        (["austin"], (None, None)),
        ([], (None, None)),
    ])
    def test_split(self, parts: list[str], expected: tuple):
        """Slug tokens split at the right city boundary."""
        assert split_slug_performer_city(parts) == expected


class TestStubhubUrl:
    """Fields encoded in StubHub event paths."""

    def test_date_performer_city(self):
        """Date, performer and single-token city come from the path."""
        ctx = parse_stubhub_url(Page.from_html("", STUBHUB_URL))
        assert ctx.date_day == "2025-11-02"
        assert ctx.performer_query == "Foo Fighters"
        assert ctx.city == "Austin"
        assert ctx.state is None

    def test_multi_word_city(self):
        """Multi-word cities are kept whole."""
        url = "https://www.stubhub.com/chris-stapleton-salt-lake-city-tickets-3-12-2026/event/456"
        ctx = parse_stubhub_url(Page.from_html("<title>Chris Stapleton</title>", url))
        assert ctx.performer_query == "Chris Stapleton"
        assert ctx.city == "Salt Lake City"
        assert ctx.date_day == "2026-03-12"
        assert ctx.raw_title == "Chris Stapleton"

    def test_locale_prefix_ignored(self):
        """Locale path prefixes are not part of the slug."""
        url = "https://www.stubhub.com/en-us/foo-fighters-austin-tickets-11-2-2025/event/123"
        ctx = parse_stubhub_url(Page.from_html("", url))
        assert ctx.performer_query == "Foo Fighters"

    @pytest.mark.parametrize("url", [
        "https://www.stubhub.com/foo-fighters-tickets/performer/123",
        "https://www.stubhub.com/foo-fighters-austin-tickets-11-2-2025",
        "",
    ])
    def test_non_event_path(self, url: str):
        """Paths that are not event pages give no context."""
        assert parse_stubhub_url(Page.from_html("", url)) is None


class TestStubhubTime:
    """Show time from meta tags or body text."""

    def test_time_from_meta(self, make_page):
        """A meta description time is read first."""
        page = make_page(url=STUBHUB_URL, meta={"og:description": "Doors open at 7:30 pm"})
        assert extract_stubhub_time(page).time_24 == "19:30"

    def test_time_from_body(self, make_page):
        """Visible body text is scanned when meta has no time."""
        page = make_page(url=STUBHUB_URL, body="Sun, Nov 2 • 8:00 PM • Moody Center")
        assert extract_stubhub_time(page).time_24 == "20:00"

    def test_no_time(self, make_page):
        """No time anywhere gives no context."""
        assert extract_stubhub_time(make_page(url=STUBHUB_URL, title="Foo Fighters")) is None

    def test_comment_time_ignored(self):
        """Times inside HTML comments are not visible text."""
        page = Page.from_html("<html><body><!-- build 9 pm --><p>Show</p></body></html>", STUBHUB_URL)
        assert extract_stubhub_time(page) is None


class TestViagogo:
    """Viagogo free-text variant with venue recognition."""

    DESCRIPTION = "Foo Fighters tickets at Moody Center in Austin, TX on November 2, 2025 7:30 PM"

    def test_parse_text(self):
        """City, venue, date and time come from one description."""
        ctx = parse_viagogo_text(self.DESCRIPTION)
        assert (ctx.city, ctx.state) == ("Austin", "TX")
        assert ctx.venue_name == "Moody Center"
        assert (ctx.date_day, ctx.time_24) == ("2025-11-02", "19:30")

    def test_parse_text_nothing(self):
        """Text without any signal gives no context."""
        assert parse_viagogo_text("Buy and sell tickets") is None
        assert parse_viagogo_text("") is None

    def test_smart_extract(self, make_page):
        """Heading performer gets the venue appended."""
        page = make_page(
            url="https://www.viagogo.com/Concert-Tickets/Rock/Foo-Fighters-Tickets/E-1",
            title="Foo Fighters Tickets | viagogo",
            h1="Foo Fighters Tickets",
            meta={"og:description": self.DESCRIPTION},
        )
        ctx = extract_viagogo_smart(page)
        assert ctx.performer_query == "Foo Fighters Moody Center"
        assert ctx.raw_title == "Foo Fighters Tickets | viagogo"
        assert ctx.venue_name == "Moody Center"
        assert (ctx.city, ctx.date_day, ctx.time_24) == ("Austin", "2025-11-02", "19:30")

    def test_smart_extract_without_signal(self, make_page):
        """A heading alone is not enough."""
        page = make_page(url="https://www.viagogo.com/x", h1="Foo Fighters Tickets")
        assert extract_viagogo_smart(page) is None
