"""Offer pricing, labelling and ordering."""

import math
from typing import Optional

from ticket_context.models import Offer

OWN_SOURCE = "geturtix"

SOURCE_LABELS = {
    "tn": "TicketNetwork",
    "tl": "TicketLiquidator",
    "sbs": "SuperBoleteria",
    "geturtix": "Get ur Tix",
}


def source_label(source: Optional[str]) -> str:
    key = (source or "").strip().lower()
    return SOURCE_LABELS.get(key) or source or "—"


def offer_price(offer: Offer):
    """Estimated price after promo, else the base minimum."""
    if offer.est_after_promo is not None:
        return offer.est_after_promo
    return offer.base_price_min


def has_promo(offer: Offer) -> bool:
    return offer.promo_percent is not None or bool(offer.promo_code)


def price_number(offer: Offer) -> float:
    """Numeric price for sorting; unpriced or unparsable offers sort last."""
    price = offer_price(offer)
    try:
        value = float(price)
    except (TypeError, ValueError):
        return math.inf
    return value if math.isfinite(value) else math.inf


def format_money(value) -> str:
    if value is None:
        return "—"
    try:
        return f"${float(value):.2f}"
    except (TypeError, ValueError):
        return f"${value}"


def sort_offers(offers: list[Offer]) -> list[Offer]:
    """Our own listings first, then cheapest first, then by label."""
    def key(offer: Offer):
        source = (offer.source or "").lower()
        return (source != OWN_SOURCE, price_number(offer), source_label(source))

    return sorted(offers, key=key)
