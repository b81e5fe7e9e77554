"""Event classification, team side and player/assist splitting."""

import pytest

from unihockey_feed.models.enums import DisplayMode, EventType, TeamSide
from unihockey_feed.normalization.events import (
    DEFAULT_CLASSIFICATION,
    EVENT_CLASSIFICATIONS,
    classify_event,
    resolve_team_side,
    running_score,
    split_player_assist,
)


@pytest.mark.parametrize("marker, classification", EVENT_CLASSIFICATIONS)
def test_every_marker_classifies_as_its_own_entry(marker, classification):
    assert classify_event(marker) == classification


def test_no_marker_is_shadowed_by_an_earlier_one():
    markers = [marker for marker, _ in EVENT_CLASSIFICATIONS]
    for later_index, later in enumerate(markers):
        for earlier in markers[:later_index]:
            assert earlier not in later, f"'{earlier}' would shadow '{later}'"


@pytest.mark.parametrize(
    "description, event_type",
    [
        ("Torschütze 4:4", EventType.GOAL),
        ("Eigentor 2:3", EventType.OWN_GOAL),
        ("2+2'-Strafe (Stockschlag)", EventType.PENALTY_2PLUS2),
        ("2'-Strafe (Halten)", EventType.PENALTY_2MIN),
        ("10'-Strafe", EventType.PENALTY_10MIN),
        ("Matchstrafe", EventType.MATCH_PENALTY),
        ("Spielbeginn", EventType.GAME_START),
        ("Spielende", EventType.GAME_END),
        ("Ende 2. Drittel", EventType.PERIOD_END),
        ("Beginn 3. Drittel", EventType.PERIOD_START),
        ("Beginn Verlängerung", EventType.OVERTIME_START),
        ("Timeout", EventType.TIMEOUT),
        ("Bester Spieler", EventType.BEST_PLAYER),
        ("Penaltyschiessen", EventType.SHOOTOUT),
    ],
)
def test_known_descriptions(description, event_type):
    assert classify_event(description).event_type == event_type


def test_specific_penalty_beats_generic_penalty():
    specific = classify_event("2+2'-Strafe")
    assert specific.event_type == EventType.PENALTY_2PLUS2
    assert specific.display_mode == DisplayMode.BADGE
    assert classify_event("Strafe").event_type == EventType.PENALTY


@pytest.mark.parametrize("description", ["", None, "Wechsel", "Videobeweis"])
def test_unknown_text_is_other_info_inline(description):
    result = classify_event(description)
    assert result == DEFAULT_CLASSIFICATION
    assert (result.event_type, result.icon, result.display_mode) == (EventType.OTHER, "info", DisplayMode.INLINE)


def test_goal_by_home_team():
    assert classify_event("Torschütze 4:4").event_type == EventType.GOAL
    assert resolve_team_side("Zug United", "Zug United", "UHC Uster") == TeamSide.HOME


@pytest.mark.parametrize(
    "team, side",
    [("UHC Uster", TeamSide.AWAY), ("zug united", TeamSide.NEUTRAL), ("", TeamSide.NEUTRAL), (None, TeamSide.NEUTRAL)],
)
def test_team_side_is_exact_match(team, side):
    assert resolve_team_side(team, "Zug United", "UHC Uster") == side


@pytest.mark.parametrize(
    "text, expected",
    [
        ("M. Muster (A. Helfer)", ("M. Muster", "A. Helfer")),
        ("M. Muster", ("M. Muster", None)),
        ("M. Muster ()", ("M. Muster", None)),
        ("", ("", None)),
    ],
)
def test_split_player_assist(text, expected):
    assert split_player_assist(text) == expected


def test_running_score():
    assert running_score("Torschütze 4:4") == "4:4"
    assert running_score("Spielbeginn") is None
