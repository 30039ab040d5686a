"""City/state parsing from free-text location strings."""

import re
from typing import Any, Optional

from ticket_context.normalizers.text import norm_space

# "Austin, TX ..." anchored at the start
CITY_COMMA_STATE_RE = re.compile(r"^([^,]+?),\s*([A-Z]{2})\b")
# Looser "Austin TX"
CITY_SPACE_STATE_RE = re.compile(r"^(.+?)\s+([A-Z]{2})\b")


def parse_city_state(text: Any) -> tuple[Optional[str], Optional[str]]:
    """Parse (city, state) from a location string like "El Paso, TX".

    Returns (None, None) when neither pattern matches.
    """
    t = norm_space(text)
    if not t:
        return None, None

    for pattern in (CITY_COMMA_STATE_RE, CITY_SPACE_STATE_RE):
        match = pattern.match(t)
        if match:
            city = norm_space(match.group(1))
            if city:
                return city, match.group(2)

    return None, None
