"""Status/score parser.

Status is always derived from the score cell and the time/label cell,
never copied from upstream. Numeric detection runs first; the live keyword
check can then only upgrade to live.
"""

import re
from dataclasses import dataclass
from typing import Optional

from unihockey_feed.models.enums import GameStatus

SCORE_PATTERN = re.compile(r"(\d+)\s*[:\-]\s*(\d+)(\s*\*)?")

# Lowercased markers meaning "game in progress"
LIVE_MARKERS = ("live", "spiel läuft", "läuft", "laufend", "in progress")

_PERIOD_PATTERN = re.compile(r"(\d)\.\s*(?:drittel|periode|period)", re.IGNORECASE)
_OVERTIME_MARKERS = ("verlängerung", "overtime")
_SHOOTOUT_MARKERS = ("penaltyschiessen", "shootout")
_CLOCK_PATTERN = re.compile(r"\b(\d{1,2}:\d{2})\b")


@dataclass(frozen=True)
class ScoreStatus:
    status: GameStatus
    home_score: Optional[int] = None
    away_score: Optional[int] = None


def has_live_marker(*texts: Optional[str]) -> bool:
    for text in texts:
        if not text:
            continue
        lowered = text.lower()
        if any(marker in lowered for marker in LIVE_MARKERS):
            return True
    return False


def parse_score_status(score_text: Optional[str], time_text: Optional[str] = None) -> ScoreStatus:
    """Derive {status, home_score, away_score} from raw cell texts."""
    score_text = (score_text or "").strip()
    match = SCORE_PATTERN.search(score_text)

    if match and match.group(3):
        result = ScoreStatus(GameStatus.LIVE, int(match.group(1)), int(match.group(2)))
    elif match:
        result = ScoreStatus(GameStatus.FINISHED, int(match.group(1)), int(match.group(2)))
    else:
        result = ScoreStatus(GameStatus.UPCOMING)

    if result.status != GameStatus.LIVE and has_live_marker(time_text, score_text):
        result = ScoreStatus(GameStatus.LIVE, result.home_score, result.away_score)
    return result


def extract_period(*texts: Optional[str]) -> Optional[str]:
    """Period label such as "2. Drittel", "Verlängerung" or "Penaltyschiessen"."""
    for text in texts:
        if not text:
            continue
        match = _PERIOD_PATTERN.search(text)
        if match:
            return f"{match.group(1)}. Drittel"
        lowered = text.lower()
        if any(marker in lowered for marker in _OVERTIME_MARKERS):
            return "Verlängerung"
        if any(marker in lowered for marker in _SHOOTOUT_MARKERS):
            return "Penaltyschiessen"
    return None


def extract_live_clock(status: GameStatus, time_text: Optional[str]) -> Optional[str]:
    """Game clock shown next to a live marker ("Spiel läuft 12:34")."""
    if status != GameStatus.LIVE or not has_live_marker(time_text):
        return None
    match = _CLOCK_PATTERN.search(time_text or "")
    return match.group(1) if match else None
