"""League catalogue for the Swiss Unihockey competitions.

Game classes encode gender/division tier: 11 = men's, 21 = women's. League
ids are stable across seasons; groups only exist below NLB.
"""

import re
from typing import Dict, Optional, Tuple

GAME_CLASS_MEN = 11
GAME_CLASS_WOMEN = 21

LEAGUE_ID_L_UPL = 24
LEAGUE_ID_NLB = 2
LEAGUE_ID_ERSTE_LIGA = 3
LEAGUE_ID_ZWEITE_LIGA = 4
LEAGUE_ID_DRITTE_LIGA = 5
LEAGUE_ID_VIERTE_LIGA = 6

# Lowercased league names/abbreviations that resolve to a league id.
LEAGUE_NAME_IDS: Dict[str, int] = {
    "l-upl": LEAGUE_ID_L_UPL,
    "nla": LEAGUE_ID_L_UPL,
    "nlb": LEAGUE_ID_NLB,
    "hnlb": LEAGUE_ID_NLB,
    "dnlb": LEAGUE_ID_NLB,
    "1. liga": LEAGUE_ID_ERSTE_LIGA,
    "2. liga": LEAGUE_ID_ZWEITE_LIGA,
    "3. liga": LEAGUE_ID_DRITTE_LIGA,
    "4. liga": LEAGUE_ID_VIERTE_LIGA,
}

# Closed marker sets. Women's markers are checked first: "damen" and
# "women" both contain "men".
WOMEN_MARKERS: Tuple[str, ...] = ("damen", "women", "dnlb", "female", "frauen")
MEN_MARKERS: Tuple[str, ...] = ("herren", "men", "hnlb", "male", "männer")

# Leading tokens of a composite table name ("Damen GF NLB") that are not
# part of the league name itself.
COMPOSITE_NAME_PREFIXES = frozenset(
    {"herren", "damen", "junioren", "juniorinnen", "gf", "kf"}
)

_WOMEN_PATTERN = re.compile(r"\b(?:" + "|".join(WOMEN_MARKERS) + r")\b", re.IGNORECASE)
_MEN_PATTERN = re.compile(r"\b(?:" + "|".join(MEN_MARKERS) + r")\b", re.IGNORECASE)


def infer_game_class(text: Optional[str]) -> Optional[int]:
    """Guess the game class from gender markers in a league or team name."""
    if not text:
        return None
    if _WOMEN_PATTERN.search(text):
        return GAME_CLASS_WOMEN
    if _MEN_PATTERN.search(text):
        return GAME_CLASS_MEN
    return None


def resolve_league_id(league: Optional[str]) -> Optional[str]:
    """Turn a numeric id or a known league name into a league id string."""
    if league is None:
        return None
    cleaned = str(league).strip()
    if not cleaned:
        return None
    if cleaned.isdigit():
        return cleaned
    league_id = LEAGUE_NAME_IDS.get(cleaned.lower())
    return str(league_id) if league_id is not None else None


def short_league_name(full_name: str) -> str:
    """Strip gender/field-size prefixes: "Herren GF L-UPL" -> "L-UPL"."""
    tokens = full_name.split()
    while tokens and tokens[0].lower() in COMPOSITE_NAME_PREFIXES:
        tokens.pop(0)
    return " ".join(tokens) if tokens else full_name.strip()
