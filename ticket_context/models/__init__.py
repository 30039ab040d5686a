"""Data models for ticket context extraction."""

from ticket_context.models.context import CONTEXT_FIELDS, EventContext, ExtractionResult
from ticket_context.models.match import Match, MatchRequest, MatchResponse, Offer

__all__ = [
    "CONTEXT_FIELDS",
    "EventContext",
    "ExtractionResult",
    "Match",
    "MatchRequest",
    "MatchResponse",
    "Offer",
]
