"""Structural layout detection per entity kind."""

import pytest
from hypothesis import given, strategies as st

from unihockey_feed.models.enums import EntityKind
from unihockey_feed.models.tabular import Row
from unihockey_feed.normalization.layouts import (
    EventRowLayout,
    GameDetailLayout,
    GameRowLayout,
    PlayerStatsLayout,
    RankingRowLayout,
    RosterRowLayout,
    TeamStatsLayout,
    resolve_event_row,
    resolve_game_detail_row,
    resolve_game_row,
    resolve_player_overview_row,
    resolve_player_stats_row,
    resolve_ranking_row,
    resolve_roster_row,
    resolve_team_competition_row,
    resolve_team_stats_row,
)

from conftest import cell, current_game_row, image_cell, list_game_row, ranking_row, row, team_game_row

any_cell = st.one_of(
    st.builds(lambda t: cell(t), st.text(max_size=10)),
    st.just(image_cell("https://img.test/logo.png")),
)
game_kinds = st.sampled_from([EntityKind.GAME_LISTING, EntityKind.TEAM_SCHEDULE, EntityKind.HEAD_TO_HEAD])


@given(st.lists(any_cell, max_size=4), game_kinds)
def test_game_rows_with_fewer_than_five_cells_are_rejected(cells, kind):
    assert resolve_game_row(Row.model_validate(row(cells)), kind) is None


def test_list_layout_needs_image_at_index_three():
    resolved = resolve_game_row(Row.model_validate(list_game_row()))
    assert resolved.layout == GameRowLayout.LIST
    assert resolved.home.text == ["Zug United"]
    assert resolved.away.text == ["Kloten-Dietlikon Jets"]
    assert resolved.score.text == ["5:3"]
    assert resolved.location.text == ["Sporthalle Herti", "Zug"]


def test_eight_cells_without_image_fall_back_to_current():
    cells = [cell(str(i)) for i in range(8)]
    resolved = resolve_game_row(Row.model_validate(row(cells)))
    assert resolved.layout == GameRowLayout.CURRENT
    assert resolved.home.text == ["1"]
    assert resolved.away.text == ["3"]
    assert resolved.score.text == ["4"]


def test_current_layout_columns():
    resolved = resolve_game_row(Row.model_validate(current_game_row(score="2:1*", time="Spiel läuft")))
    assert resolved.layout == GameRowLayout.CURRENT
    assert resolved.when.text == ["Spiel läuft"]
    assert resolved.location is None


def test_team_layout_only_for_schedule_kinds():
    schedule_row = Row.model_validate(team_game_row(1))
    assert resolve_game_row(schedule_row, EntityKind.TEAM_SCHEDULE).layout == GameRowLayout.TEAM
    assert resolve_game_row(schedule_row, EntityKind.HEAD_TO_HEAD).league.text == ["Herren GF L-UPL"]
    assert resolve_game_row(schedule_row, EntityKind.GAME_LISTING).layout == GameRowLayout.CURRENT


def test_game_detail_layouts():
    full = row([image_cell("h.png"), cell("Zug"), image_cell("a.png"), cell("Uster"), cell("3:2"),
                cell("13.09.2025"), cell("19:30"), cell("Herti"), cell("Meier")])
    compact = row([cell("Zug"), cell("Uster"), cell("3:2"), cell("13.09.2025 19:30"), cell("Herti")])
    assert resolve_game_detail_row(Row.model_validate(full)).layout == GameDetailLayout.FULL
    assert resolve_game_detail_row(Row.model_validate(full)).spectators is None
    assert resolve_game_detail_row(Row.model_validate(compact)).layout == GameDetailLayout.COMPACT
    assert resolve_game_detail_row(Row.model_validate(row([cell("Zug")] * 4))) is None


@pytest.mark.parametrize(
    "count, layout",
    [(4, EventRowLayout.STANDARD), (3, EventRowLayout.NO_TEAM), (2, EventRowLayout.BARE), (1, None)],
)
def test_event_layouts(count, layout):
    resolved = resolve_event_row(Row.model_validate(row([cell(str(i)) for i in range(count)])))
    if layout is None:
        assert resolved is None
    else:
        assert resolved.layout == layout


def test_event_without_team_reads_player_from_third_cell():
    resolved = resolve_event_row(Row.model_validate(row([cell("12:00"), cell("Torschütze"), cell("A. Muster")])))
    assert resolved.team is None
    assert resolved.player.text == ["A. Muster"]


def test_ranking_layouts():
    standard = Row.model_validate(ranking_row(1, "Zug United", 1))
    assert resolve_ranking_row(standard).layout == RankingRowLayout.STANDARD

    extended = Row.model_validate(row(
        [cell("1"), image_cell("l.png"), cell("Zug")] + [cell(str(i)) for i in range(8)]
    ))
    resolved = resolve_ranking_row(extended)
    assert resolved.layout == RankingRowLayout.EXTENDED
    assert resolved.draws is None
    assert resolved.overtime_wins.text == ["2"]

    compact = Row.model_validate(row([cell(str(i)) for i in range(8)]))
    assert resolve_ranking_row(compact).layout == RankingRowLayout.COMPACT
    assert resolve_ranking_row(Row.model_validate(row([cell("1")] * 7))) is None


def test_roster_and_player_layouts():
    assert resolve_roster_row(Row.model_validate(row([cell("7"), cell("A"), cell("Stürmer")]))).layout == RosterRowLayout.BASIC
    assert resolve_roster_row(Row.model_validate(row([cell("x")] * 8))).layout == RosterRowLayout.STATS
    assert resolve_roster_row(Row.model_validate(row([cell("x")] * 2))) is None

    assert resolve_player_stats_row(Row.model_validate(row([cell("x")] * 11))).layout == PlayerStatsLayout.FULL
    basic = resolve_player_stats_row(Row.model_validate(row([cell("x")] * 9)))
    assert basic.layout == PlayerStatsLayout.BASIC
    assert basic.two_minute is None
    assert resolve_player_stats_row(Row.model_validate(row([cell("x")] * 6))) is None

    assert resolve_player_overview_row(Row.model_validate(row([cell("x")] * 10))) is not None
    assert resolve_player_overview_row(Row.model_validate(row([cell("x")] * 9))) is None


def test_team_statistics_and_competition_layouts():
    assert resolve_team_stats_row(Row.model_validate(row([cell("x")] * 8))).layout == TeamStatsLayout.FULL
    basic = resolve_team_stats_row(Row.model_validate(row([cell("2024/25"), cell("Herren GF L-UPL")])))
    assert basic.layout == TeamStatsLayout.BASIC
    assert basic.position is None
    assert resolve_team_stats_row(Row.model_validate(row([cell("2024/25")]))) is None

    single = resolve_team_competition_row(Row.model_validate(row([cell("Schweizer Cup")])))
    assert single.name.text == ["Schweizer Cup"]
    assert single.season is None
    full = resolve_team_competition_row(Row.model_validate(row([cell("2025/26"), cell("Herren GF L-UPL"), cell("Gruppe 1")])))
    assert full.name.text == ["Herren GF L-UPL"]
    assert full.group.text == ["Gruppe 1"]
    assert resolve_team_competition_row(Row.model_validate(row([]))) is None
