"""Field-level merge policies for partial event contexts."""

from typing import Any, Optional

from ticket_context.models import CONTEXT_FIELDS, EventContext


def is_present(value: Any) -> bool:
    """A field counts as present when non-None and non-blank."""
    return value is not None and str(value).strip() != ""


def merge_overwrite(
    a: Optional[EventContext], b: Optional[EventContext]
) -> Optional[EventContext]:
    """Copy of a where every present field of b wins unconditionally.

    Used when b is the more authoritative source for what it carries
    (e.g. a date read from the URL beats one guessed from meta text).
    """
    if a is None and b is None:
        return None
    result = a.model_copy() if a is not None else EventContext()
    if b is None:
        return result

    for field in CONTEXT_FIELDS:
        value = getattr(b, field)
        if is_present(value):
            setattr(result, field, value)
    return result


def merge_fill_missing(
    a: Optional[EventContext], b: Optional[EventContext]
) -> Optional[EventContext]:
    """Copy of a with b's fields filling only the gaps.

    A bad later guess can never clobber a good earlier one.
    """
    if a is None and b is None:
        return None
    result = a.model_copy() if a is not None else EventContext()
    if b is None:
        return result

    for field in CONTEXT_FIELDS:
        value = getattr(b, field)
        if not is_present(getattr(result, field)) and is_present(value):
            setattr(result, field, value)
    return result
