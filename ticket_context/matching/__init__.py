"""Remote offer matching for extracted contexts."""

from ticket_context.matching.client import MatchAPIError, MatchClient
from ticket_context.matching.offers import (
    format_money,
    has_promo,
    offer_price,
    sort_offers,
    source_label,
)

__all__ = [
    "MatchAPIError",
    "MatchClient",
    "format_money",
    "has_promo",
    "offer_price",
    "sort_offers",
    "source_label",
]
