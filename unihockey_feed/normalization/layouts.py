"""Row layout detection.

Upstream never says which column arrangement a row uses, so each logical
entity has a closed set of layout variants told apart structurally (cell
count, image positions). A row is sniffed once; afterwards mappers only see
the named cells of the returned struct. Adding a layout means adding a
variant, a column map and one discriminator branch.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple, Optional, Sequence

from unihockey_feed.models.enums import EntityKind
from unihockey_feed.models.tabular import Cell, Row

from .extractors import cell_at, has_image

MIN_GAME_ROW_CELLS = 5


# --- Games (listing, team schedule, head-to-head) ---------------------------


class GameRowLayout(str, Enum):
    LIST = "list"
    CURRENT = "current"
    TEAM = "team"


class GameColumns(NamedTuple):
    when: int
    home: int
    away: int
    score: int
    location: Optional[int] = None
    home_logo: Optional[int] = None
    away_logo: Optional[int] = None
    league: Optional[int] = None


GAME_COLUMNS: Dict[GameRowLayout, GameColumns] = {
    # [datetime, location, home, homeLogo, sep, awayLogo, away, score, ...]
    GameRowLayout.LIST: GameColumns(when=0, location=1, home=2, home_logo=3, away_logo=5, away=6, score=7),
    # [time, home, sep, away, score]
    GameRowLayout.CURRENT: GameColumns(when=0, home=1, away=3, score=4),
    # [datetime, location, league, home, away, score]
    GameRowLayout.TEAM: GameColumns(when=0, location=1, league=2, home=3, away=4, score=5),
}


@dataclass(frozen=True)
class GameRowCells:
    layout: GameRowLayout
    when: Cell
    home: Cell
    away: Cell
    score: Cell
    location: Optional[Cell] = None
    home_logo: Optional[Cell] = None
    away_logo: Optional[Cell] = None
    league: Optional[Cell] = None


def _is_list_layout(cells: Sequence[Cell]) -> bool:
    return len(cells) >= 8 and has_image(cells[3])


def detect_game_layout(row: Row, kind: EntityKind = EntityKind.GAME_LISTING) -> Optional[GameRowLayout]:
    cells = row.cells
    if len(cells) < MIN_GAME_ROW_CELLS:
        return None
    if _is_list_layout(cells):
        return GameRowLayout.LIST
    if kind in (EntityKind.TEAM_SCHEDULE, EntityKind.HEAD_TO_HEAD) and len(cells) >= 6:
        return GameRowLayout.TEAM
    return GameRowLayout.CURRENT


def resolve_game_row(row: Row, kind: EntityKind = EntityKind.GAME_LISTING) -> Optional[GameRowCells]:
    layout = detect_game_layout(row, kind)
    if layout is None:
        return None
    columns = GAME_COLUMNS[layout]
    cells = row.cells
    return GameRowCells(
        layout=layout,
        when=cells[columns.when],
        home=cells[columns.home],
        away=cells[columns.away],
        score=cells[columns.score],
        location=cell_at(cells, columns.location),
        home_logo=cell_at(cells, columns.home_logo),
        away_logo=cell_at(cells, columns.away_logo),
        league=cell_at(cells, columns.league),
    )


# --- Game detail ------------------------------------------------------------


class GameDetailLayout(str, Enum):
    FULL = "full"
    COMPACT = "compact"


class GameDetailColumns(NamedTuple):
    home: int
    away: int
    score: int
    date: int
    location: int
    time: Optional[int] = None
    home_logo: Optional[int] = None
    away_logo: Optional[int] = None
    referee_first: Optional[int] = None
    referee_second: Optional[int] = None
    spectators: Optional[int] = None


GAME_DETAIL_COLUMNS: Dict[GameDetailLayout, GameDetailColumns] = {
    # [homeLogo, home, awayLogo, away, score, date, time, location, ref1, ref2, spectators]
    GameDetailLayout.FULL: GameDetailColumns(
        home_logo=0, home=1, away_logo=2, away=3, score=4, date=5, time=6,
        location=7, referee_first=8, referee_second=9, spectators=10,
    ),
    # [home, away, score, datetime, location, ref1, ref2, spectators]
    GameDetailLayout.COMPACT: GameDetailColumns(
        home=0, away=1, score=2, date=3, location=4,
        referee_first=5, referee_second=6, spectators=7,
    ),
}


@dataclass(frozen=True)
class GameDetailCells:
    layout: GameDetailLayout
    home: Cell
    away: Cell
    score: Cell
    date: Cell
    location: Cell
    time: Optional[Cell] = None
    home_logo: Optional[Cell] = None
    away_logo: Optional[Cell] = None
    referee_first: Optional[Cell] = None
    referee_second: Optional[Cell] = None
    spectators: Optional[Cell] = None


def detect_game_detail_layout(row: Row) -> Optional[GameDetailLayout]:
    cells = row.cells
    if len(cells) < MIN_GAME_ROW_CELLS:
        return None
    if len(cells) >= 8 and has_image(cells[0]):
        return GameDetailLayout.FULL
    return GameDetailLayout.COMPACT


def resolve_game_detail_row(row: Row) -> Optional[GameDetailCells]:
    layout = detect_game_detail_layout(row)
    if layout is None:
        return None
    columns = GAME_DETAIL_COLUMNS[layout]
    cells = row.cells
    return GameDetailCells(
        layout=layout,
        home=cells[columns.home],
        away=cells[columns.away],
        score=cells[columns.score],
        date=cells[columns.date],
        location=cells[columns.location],
        time=cell_at(cells, columns.time),
        home_logo=cell_at(cells, columns.home_logo),
        away_logo=cell_at(cells, columns.away_logo),
        referee_first=cell_at(cells, columns.referee_first),
        referee_second=cell_at(cells, columns.referee_second),
        spectators=cell_at(cells, columns.spectators),
    )


# --- Game events ------------------------------------------------------------


class EventRowLayout(str, Enum):
    STANDARD = "standard"
    NO_TEAM = "no_team"
    BARE = "bare"


@dataclass(frozen=True)
class EventRowCells:
    layout: EventRowLayout
    time: Cell
    event: Cell
    team: Optional[Cell] = None
    player: Optional[Cell] = None


def resolve_event_row(row: Row) -> Optional[EventRowCells]:
    cells = row.cells
    if len(cells) >= 4:
        # [time, event, team, player]
        return EventRowCells(EventRowLayout.STANDARD, cells[0], cells[1], cells[2], cells[3])
    if len(cells) == 3:
        # [time, event, player]
        return EventRowCells(EventRowLayout.NO_TEAM, cells[0], cells[1], player=cells[2])
    if len(cells) == 2:
        return EventRowCells(EventRowLayout.BARE, cells[0], cells[1])
    return None


# --- Rankings ---------------------------------------------------------------


class RankingRowLayout(str, Enum):
    EXTENDED = "extended"
    STANDARD = "standard"
    COMPACT = "compact"


class RankingColumns(NamedTuple):
    position: int
    team: int
    games: int
    wins: int
    losses: int
    goals: int
    points: int
    logo: Optional[int] = None
    draws: Optional[int] = None
    overtime_wins: Optional[int] = None
    overtime_losses: Optional[int] = None
    difference: Optional[int] = None


RANKING_COLUMNS: Dict[RankingRowLayout, RankingColumns] = {
    # [pos, logo, team, games, wins, otWins, otLosses, losses, goals, diff, points]
    RankingRowLayout.EXTENDED: RankingColumns(
        position=0, logo=1, team=2, games=3, wins=4, overtime_wins=5,
        overtime_losses=6, losses=7, goals=8, difference=9, points=10,
    ),
    # [pos, logo, team, games, wins, draws, losses, goals, diff, points]
    RankingRowLayout.STANDARD: RankingColumns(
        position=0, logo=1, team=2, games=3, wins=4, draws=5, losses=6,
        goals=7, difference=8, points=9,
    ),
    # [pos, team, games, wins, draws, losses, goals, points]
    RankingRowLayout.COMPACT: RankingColumns(
        position=0, team=1, games=2, wins=3, draws=4, losses=5, goals=6, points=7,
    ),
}


@dataclass(frozen=True)
class RankingRowCells:
    layout: RankingRowLayout
    position: Cell
    team: Cell
    games: Cell
    wins: Cell
    losses: Cell
    goals: Cell
    points: Cell
    logo: Optional[Cell] = None
    draws: Optional[Cell] = None
    overtime_wins: Optional[Cell] = None
    overtime_losses: Optional[Cell] = None
    difference: Optional[Cell] = None


def detect_ranking_layout(row: Row) -> Optional[RankingRowLayout]:
    cells = row.cells
    logo_at_one = len(cells) > 1 and has_image(cells[1])
    if len(cells) >= 11 and logo_at_one:
        return RankingRowLayout.EXTENDED
    if len(cells) >= 10 and logo_at_one:
        return RankingRowLayout.STANDARD
    if len(cells) >= 8:
        return RankingRowLayout.COMPACT
    return None


def resolve_ranking_row(row: Row) -> Optional[RankingRowCells]:
    layout = detect_ranking_layout(row)
    if layout is None:
        return None
    columns = RANKING_COLUMNS[layout]
    cells = row.cells
    return RankingRowCells(
        layout=layout,
        position=cells[columns.position],
        team=cells[columns.team],
        games=cells[columns.games],
        wins=cells[columns.wins],
        losses=cells[columns.losses],
        goals=cells[columns.goals],
        points=cells[columns.points],
        logo=cell_at(cells, columns.logo),
        draws=cell_at(cells, columns.draws),
        overtime_wins=cell_at(cells, columns.overtime_wins),
        overtime_losses=cell_at(cells, columns.overtime_losses),
        difference=cell_at(cells, columns.difference),
    )


# --- Team roster ------------------------------------------------------------


class RosterRowLayout(str, Enum):
    STATS = "stats"
    BASIC = "basic"


@dataclass(frozen=True)
class RosterRowCells:
    layout: RosterRowLayout
    number: Cell
    name: Cell
    position: Cell
    year_of_birth: Optional[Cell] = None
    goals: Optional[Cell] = None
    assists: Optional[Cell] = None
    points: Optional[Cell] = None
    penalty_minutes: Optional[Cell] = None


def resolve_roster_row(row: Row) -> Optional[RosterRowCells]:
    cells = row.cells
    if len(cells) >= 8:
        # [number, name, position, yearOfBirth, goals, assists, points, pim]
        return RosterRowCells(
            RosterRowLayout.STATS, cells[0], cells[1], cells[2], cells[3],
            goals=cells[4], assists=cells[5], points=cells[6], penalty_minutes=cells[7],
        )
    if len(cells) >= 3:
        # [number, name, position, yearOfBirth?]
        return RosterRowCells(RosterRowLayout.BASIC, cells[0], cells[1], cells[2], cell_at(cells, 3))
    return None


# --- Team statistics and competitions ---------------------------------------


class TeamStatsLayout(str, Enum):
    FULL = "full"
    BASIC = "basic"


@dataclass(frozen=True)
class TeamStatsCells:
    layout: TeamStatsLayout
    season: Cell
    league: Cell
    position: Optional[Cell] = None
    games: Optional[Cell] = None
    wins: Optional[Cell] = None
    draws: Optional[Cell] = None
    losses: Optional[Cell] = None
    points: Optional[Cell] = None


def resolve_team_stats_row(row: Row) -> Optional[TeamStatsCells]:
    cells = row.cells
    if len(cells) >= 8:
        # [season, league, rank, games, wins, draws, losses, points]
        return TeamStatsCells(TeamStatsLayout.FULL, *cells[:8])
    if len(cells) >= 2:
        # [season, league, rank?]
        return TeamStatsCells(TeamStatsLayout.BASIC, cells[0], cells[1], cell_at(cells, 2))
    return None


@dataclass(frozen=True)
class TeamCompetitionCells:
    name: Cell
    season: Optional[Cell] = None
    group: Optional[Cell] = None


def resolve_team_competition_row(row: Row) -> Optional[TeamCompetitionCells]:
    cells = row.cells
    if len(cells) >= 2:
        # [season, competition, group?]
        return TeamCompetitionCells(cells[1], season=cells[0], group=cell_at(cells, 2))
    if cells:
        return TeamCompetitionCells(cells[0])
    return None


# --- Player statistics / overview -------------------------------------------


class PlayerStatsLayout(str, Enum):
    FULL = "full"
    BASIC = "basic"


@dataclass(frozen=True)
class PlayerStatsCells:
    layout: PlayerStatsLayout
    season: Cell
    league: Cell
    team: Cell
    games: Cell
    goals: Cell
    assists: Cell
    points: Cell
    two_minute: Optional[Cell] = None
    five_minute: Optional[Cell] = None
    ten_minute: Optional[Cell] = None
    match_penalty: Optional[Cell] = None


def resolve_player_stats_row(row: Row) -> Optional[PlayerStatsCells]:
    cells = row.cells
    if len(cells) < 7:
        return None
    # [season, league, team, games, goals, assists, points, pen2, pen5, pen10, penMatch]
    layout = PlayerStatsLayout.FULL if len(cells) >= 11 else PlayerStatsLayout.BASIC
    return PlayerStatsCells(
        layout, *cells[:7],
        two_minute=cell_at(cells, 7) if layout == PlayerStatsLayout.FULL else None,
        five_minute=cell_at(cells, 8) if layout == PlayerStatsLayout.FULL else None,
        ten_minute=cell_at(cells, 9) if layout == PlayerStatsLayout.FULL else None,
        match_penalty=cell_at(cells, 10) if layout == PlayerStatsLayout.FULL else None,
    )


@dataclass(frozen=True)
class PlayerOverviewCells:
    date: Cell
    venue: Cell
    time: Cell
    home: Cell
    away: Cell
    score: Cell
    goals: Cell
    assists: Cell
    points: Cell
    penalty_minutes: Cell


def resolve_player_overview_row(row: Row) -> Optional[PlayerOverviewCells]:
    cells = row.cells
    if len(cells) < 10:
        return None
    # [date, venue, time, home, away, score, goals, assists, points, penalties]
    return PlayerOverviewCells(*cells[:10])
