"""Event context extraction for ticket marketplace pages."""

from ticket_context.extractors import extract_context, extract_page_context, handle_message
from ticket_context.models import EventContext, ExtractionResult

__version__ = "0.1.0"

__all__ = [
    "EventContext",
    "ExtractionResult",
    "extract_context",
    "extract_page_context",
    "handle_message",
]
