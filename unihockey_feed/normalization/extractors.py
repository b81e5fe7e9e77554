"""Field extractors.

One helper per semantic type, so every mapper handles missing or malformed
cells the same way: required values raise MissingFieldError (the row is
dropped), optional values come back as None.
"""

import re
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from unihockey_feed.models.tabular import Cell, Coordinates, Row
from unihockey_feed.utils.misc_utils import synthesize_id

from .errors import MissingFieldError

_INT_PATTERN = re.compile(r"-?\d+")
_DATE_DE = re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{2,4})")
_DATE_ISO = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_TIME = re.compile(r"\b(\d{1,2}):(\d{2})\b")
_PAIR = re.compile(r"(\d+)\s*[:\-]\s*(\d+)")

RELATIVE_DAYS = {"heute": 0, "today": 0, "gestern": -1, "yesterday": -1, "morgen": 1, "tomorrow": 1}


def cell_at(cells: Sequence[Cell], index: Optional[int]) -> Optional[Cell]:
    if index is None or index < 0 or index >= len(cells):
        return None
    return cells[index]


def optional_text(cell: Optional[Cell], line: int = 0) -> Optional[str]:
    """Stripped text fragment `line` of a cell, or None when empty."""
    if cell is None or line >= len(cell.text):
        return None
    value = cell.text[line].strip()
    return value or None


def text_of(cell: Optional[Cell], line: int = 0) -> str:
    return optional_text(cell, line) or ""


def joined_text(cell: Optional[Cell], separator: str = " ") -> str:
    if cell is None:
        return ""
    return separator.join(part.strip() for part in cell.text if part.strip())


def required_text(cell: Optional[Cell], field: str, line: int = 0) -> str:
    value = optional_text(cell, line)
    if value is None:
        raise MissingFieldError(f"Missing required field '{field}'")
    return value


def int_or_none(value: Optional[str]) -> Optional[int]:
    """First integer inside a text value ("12", "+3", "12 Sp."), else None."""
    if value is None:
        return None
    match = _INT_PATTERN.search(value.replace("+", ""))
    if not match:
        return None
    return int(match.group(0))


def cell_int(cell: Optional[Cell], line: int = 0) -> Optional[int]:
    return int_or_none(optional_text(cell, line))


def cell_int_or_zero(cell: Optional[Cell], line: int = 0) -> int:
    value = cell_int(cell, line)
    return value if value is not None else 0


def link_id(cell: Optional[Cell]) -> Optional[str]:
    if cell is None or cell.link is None:
        return None
    return cell.link.primary_id


def row_link_id(row: Row) -> Optional[str]:
    if row.link is not None and row.link.primary_id:
        return row.link.primary_id
    return row.id


def team_id_or_synthesize(cell: Optional[Cell], name: str) -> str:
    """Canonical id from the cell link, else the synthetic id of the name."""
    return link_id(cell) or synthesize_id(name)


def image_url(cell: Optional[Cell]) -> Optional[str]:
    if cell is None or cell.image is None:
        return None
    return cell.image.url or None


def has_image(cell: Optional[Cell]) -> bool:
    return image_url(cell) is not None


def coordinates(cell: Optional[Cell]) -> Optional[Coordinates]:
    return cell.coordinates if cell is not None else None


def link_url(cell: Optional[Cell]) -> Optional[str]:
    if cell is None or cell.link is None:
        return None
    return cell.link.url


def parse_game_date(text: Optional[str], reference: date) -> Optional[str]:
    """ISO date from "13.09.2025", "13.09.25", "2025-09-13" or heute/gestern/morgen."""
    if not text:
        return None
    lowered = text.lower()
    for word, offset in RELATIVE_DAYS.items():
        if word in lowered:
            return (reference + timedelta(days=offset)).isoformat()
    match = _DATE_ISO.search(text)
    if match:
        year, month, day = (int(g) for g in match.groups())
    else:
        match = _DATE_DE.search(text)
        if not match:
            return None
        day, month, year = (int(g) for g in match.groups())
        if year < 100:
            year += 2000
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def parse_start_time(text: Optional[str]) -> Optional[str]:
    """"HH:MM" from free text, zero-padded."""
    if not text:
        return None
    match = _TIME.search(text)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return f"{hours:02d}:{minutes:02d}"


def parse_pair(text: Optional[str]) -> Optional[Tuple[int, int]]:
    """Two integers joined by ':' or '-' ("45:30" goals, "2 - 1" scores)."""
    if not text:
        return None
    match = _PAIR.search(text)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def non_empty_texts(cells: Sequence[Cell]) -> List[str]:
    return [text for text in (joined_text(cell) for cell in cells) if text]
