"""Text, date and location normalizers."""

from ticket_context.normalizers.dates import (
    parse_iso_datetime,
    parse_month_date_year,
    parse_numeric_date,
    parse_time_12,
)
from ticket_context.normalizers.location import parse_city_state
from ticket_context.normalizers.text import norm_space

__all__ = [
    "norm_space",
    "parse_city_state",
    "parse_iso_datetime",
    "parse_month_date_year",
    "parse_numeric_date",
    "parse_time_12",
]
