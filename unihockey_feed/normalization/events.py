"""Event classifier.

EVENT_CLASSIFICATIONS is scanned top to bottom and the first marker found
in the (lowercased) description wins, so specific markers must precede the
generic ones they contain: "2+2'-strafe" before "2'-strafe", "matchstrafe"
before "strafe", "spielende" and "ende verlängerung" before "ende".
"""

import re
from typing import Optional, Tuple

from unihockey_feed.models.enums import DisplayMode, EventType, TeamSide
from unihockey_feed.models.event import EventClassification


def _entry(marker: str, event_type: EventType, icon: str, mode: DisplayMode):
    return marker, EventClassification(event_type=event_type, icon=icon, display_mode=mode)


EVENT_CLASSIFICATIONS: Tuple[Tuple[str, EventClassification], ...] = (
    _entry("eigentor", EventType.OWN_GOAL, "goal", DisplayMode.INLINE),
    _entry("torschütze", EventType.GOAL, "goal", DisplayMode.INLINE),
    _entry("penalty verschossen", EventType.PENALTY_SHOT, "target", DisplayMode.INLINE),
    _entry("penaltyschiessen", EventType.SHOOTOUT, "target", DisplayMode.NEUTRAL),
    _entry("2+2'-strafe", EventType.PENALTY_2PLUS2, "penalty_4", DisplayMode.BADGE),
    _entry("10'-strafe", EventType.PENALTY_10MIN, "penalty_other", DisplayMode.BADGE),
    _entry("2'-strafe", EventType.PENALTY_2MIN, "penalty_2", DisplayMode.BADGE),
    _entry("5'-strafe", EventType.PENALTY_5MIN, "penalty_other", DisplayMode.BADGE),
    _entry("matchstrafe", EventType.MATCH_PENALTY, "penalty_other", DisplayMode.BADGE),
    _entry("strafe", EventType.PENALTY, "penalty_other", DisplayMode.BADGE),
    _entry("timeout", EventType.TIMEOUT, "timeout", DisplayMode.NEUTRAL),
    _entry("bester spieler", EventType.BEST_PLAYER, "best_player", DisplayMode.BADGE),
    _entry("spielbeginn", EventType.GAME_START, "whistle", DisplayMode.NEUTRAL),
    _entry("spielende", EventType.GAME_END, "whistle", DisplayMode.NEUTRAL),
    _entry("beginn verlängerung", EventType.OVERTIME_START, "clock", DisplayMode.NEUTRAL),
    _entry("ende verlängerung", EventType.PERIOD_END, "clock", DisplayMode.NEUTRAL),
    _entry("beginn", EventType.PERIOD_START, "clock", DisplayMode.NEUTRAL),
    _entry("ende", EventType.PERIOD_END, "clock", DisplayMode.NEUTRAL),
)

DEFAULT_CLASSIFICATION = EventClassification(
    event_type=EventType.OTHER, icon="info", display_mode=DisplayMode.INLINE
)

_PLAYER_ASSIST = re.compile(r"^(?P<player>.*?)\s*\((?P<assist>[^()]*)\)\s*$")
_RUNNING_SCORE = re.compile(r"(\d+)\s*:\s*(\d+)")


def classify_event(description: Optional[str]) -> EventClassification:
    """First matching marker wins; unknown text is {other, info, inline}."""
    if not description:
        return DEFAULT_CLASSIFICATION
    lowered = description.lower()
    for marker, classification in EVENT_CLASSIFICATIONS:
        if marker in lowered:
            return classification
    return DEFAULT_CLASSIFICATION


def resolve_team_side(
    team_name: Optional[str], home_name: Optional[str], away_name: Optional[str]
) -> TeamSide:
    """Exact name comparison against the game's teams; otherwise neutral."""
    if not team_name:
        return TeamSide.NEUTRAL
    if home_name and team_name == home_name:
        return TeamSide.HOME
    if away_name and team_name == away_name:
        return TeamSide.AWAY
    return TeamSide.NEUTRAL


def split_player_assist(text: Optional[str]) -> Tuple[str, Optional[str]]:
    """"Name (Assist)" -> ("Name", "Assist"); no parentheses -> (text, None)."""
    if not text:
        return "", None
    match = _PLAYER_ASSIST.match(text.strip())
    if not match:
        return text.strip(), None
    assist = match.group("assist").strip() or None
    return match.group("player").strip(), assist


def running_score(description: Optional[str]) -> Optional[str]:
    if not description:
        return None
    match = _RUNNING_SCORE.search(description)
    if not match:
        return None
    return f"{match.group(1)}:{match.group(2)}"
