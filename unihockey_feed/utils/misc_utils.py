# unihockey_feed/utils/misc_utils.py
import re
from datetime import date, datetime
from typing import Union

_WHITESPACE = re.compile(r"\s")
_NON_ID_CHARS = re.compile(r"[^a-z0-9_]")


def synthesize_id(name: str) -> str:
    """Builds a stable fallback id from a display name.

    Lower-cases, replaces each whitespace character with "_" and drops everything
    outside [a-z0-9_]. Used only when upstream omits an entity link.
    """
    lowered = _WHITESPACE.sub("_", name.strip().lower())
    return _NON_ID_CHARS.sub("", lowered)


def calculate_season_year(value: Union[str, date, datetime]) -> int:
    """Season a date belongs to; new seasons start on 1 September."""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    if value.month >= 9:
        return value.year
    return value.year - 1
