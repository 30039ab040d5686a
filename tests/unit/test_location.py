"""Tests for the city/state parser."""

import pytest

from ticket_context.normalizers.location import parse_city_state


class TestParseCityState:
    """City/state from free-text location strings."""

    @pytest.mark.parametrize("text,expected", [
        ("Austin, TX", ("Austin", "TX")),
        ("El Paso, TX 79901", ("El Paso", "TX")),
        ("  Los   Angeles ,  CA  ", ("Los Angeles", "CA")),
        ("Austin TX", ("Austin", "TX")),
        ("Chicago IL 60601", ("Chicago", "IL")),
    ])
    def test_parses(self, text: str, expected: tuple):
        """Comma and space forms, with or without a ZIP code."""
        assert parse_city_state(text) == expected

    @pytest.mark.parametrize("text", [
        "Madison Square Garden",
        "austin, tx",
        "",
        None,
    ])
    def test_no_match(self, text: str):
        """No two-letter uppercase state means no match."""
        assert parse_city_state(text) == (None, None)

    def test_comma_form_tried_first(self):
        """The comma form wins over the looser space-separated form."""
        assert parse_city_state("New York, NY USA") == ("New York", "NY")
