"""Row mappers: layout struct -> domain record.

Mappers see only the named cells produced by `layouts`; every value is read
through `extractors` so missing data is handled identically everywhere.
A mapper returns None when a row has no known layout and raises
NormalizationError when a required field is missing; `map_rows` turns the
latter into a logged skip.
"""

from datetime import date
from itertools import count
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from loguru import logger

from unihockey_feed.models.enums import EntityKind, EventType, GameStatus
from unihockey_feed.models.event import GameEvent
from unihockey_feed.models.game import GameDetail, GameSummary, LeagueRef, TeamRef, Venue
from unihockey_feed.models.player import (
    PenaltyCounts,
    PlayerGamePerformance,
    PlayerProfile,
    PlayerSeasonStats,
)
from unihockey_feed.models.ranking import RankingRow
from unihockey_feed.models.tabular import Cell, Region, Row, TabularResponse
from unihockey_feed.models.team import RosterPlayer, TeamCompetition, TeamProfile, TeamSeasonRecord
from unihockey_feed.utils.misc_utils import synthesize_id

from .errors import MissingFieldError, NormalizationError
from .events import classify_event, resolve_team_side, running_score, split_player_assist
from .extractors import (
    cell_at,
    cell_int,
    cell_int_or_zero,
    coordinates,
    image_url,
    int_or_none,
    joined_text,
    link_id,
    link_url,
    non_empty_texts,
    optional_text,
    parse_game_date,
    parse_pair,
    parse_start_time,
    required_text,
    row_link_id,
    team_id_or_synthesize,
    text_of,
)
from .layouts import (
    GameRowLayout,
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
from .status import extract_live_clock, extract_period, parse_score_status

T = TypeVar("T")

GOAL_EVENT_TYPES = (EventType.GOAL, EventType.OWN_GOAL)


def map_rows(rows: Sequence[Row], mapper: Callable[[Row], Optional[T]], entity: EntityKind) -> List[T]:
    """Apply `mapper` to each row, dropping unmappable and malformed rows."""
    records: List[T] = []
    for index, row in enumerate(rows):
        try:
            record = mapper(row)
        except Exception as e:
            logger.warning(f"Skipping {entity.value} row {index} (id={row.id}): {e}")
            continue
        if record is None:
            logger.debug(f"No known {entity.value} layout for row {index} ({len(row.cells)} cells)")
            continue
        records.append(record)
    return records


# --- League context ---------------------------------------------------------


def league_from_region(region: Region, response: TabularResponse) -> LeagueRef:
    """League of a region: its label as name, the response context as ids.

    The response context only describes the whole response, so its league id
    is trusted only when there is a single region to attach it to.
    """
    name = region.label.strip() or response.title.strip() or LeagueRef().name
    single = len(response.regions) <= 1
    league_id = response.context_value("league") if single else None
    return LeagueRef(
        id=league_id or synthesize_id(name),
        name=name,
        game_class=int_or_none(response.context_value("game_class")) if single else None,
        group=response.context_value("group") if single else None,
    )


# --- Games ------------------------------------------------------------------


def _team(name_cell: Optional[Cell], logo_cell: Optional[Cell], field: str) -> TeamRef:
    name = joined_text(name_cell)
    if not name:
        raise MissingFieldError(f"Missing required field '{field}'")
    logo = image_url(logo_cell) or image_url(name_cell)
    return TeamRef(id=team_id_or_synthesize(name_cell, name), name=name, logo=logo)


def map_game_row(
    row: Row,
    league: LeagueRef,
    reference: date,
    kind: EntityKind = EntityKind.GAME_LISTING,
) -> Optional[GameSummary]:
    cells = resolve_game_row(row, kind)
    if cells is None:
        return None

    home = _team(cells.home, cells.home_logo, "home_team")
    away = _team(cells.away, cells.away_logo, "away_team")

    when_text = joined_text(cells.when)
    score_text = joined_text(cells.score)
    game_date = parse_game_date(when_text, reference)
    if game_date is None:
        if cells.layout != GameRowLayout.CURRENT:
            raise NormalizationError(f"Unparsable game date '{when_text}'")
        # Current listings only show the time; the date is the requested one
        game_date = reference.isoformat()

    parsed = parse_score_status(score_text, when_text)
    game_id = row_link_id(row) or link_id(cells.score) or f"{game_date}_{home.id}_{away.id}"

    if cells.league is not None and joined_text(cells.league):
        league_name = joined_text(cells.league)
        league = LeagueRef(id=link_id(cells.league) or synthesize_id(league_name), name=league_name)

    return GameSummary(
        id=game_id,
        home_team=home,
        away_team=away,
        home_score=parsed.home_score,
        away_score=parsed.away_score,
        status=parsed.status,
        start_time=parse_start_time(when_text) or "",
        game_date=game_date,
        league=league,
        location=joined_text(cells.location) or None,
        period=extract_period(when_text, score_text) if parsed.status == GameStatus.LIVE else None,
        live_clock=extract_live_clock(parsed.status, when_text),
        layout=cells.layout.value,
    )


def map_game_detail(
    response: TabularResponse, game_id: str, reference: date
) -> Optional[GameDetail]:
    """The first row with a known detail layout describes the game."""
    for row in response.rows:
        cells = resolve_game_detail_row(row)
        if cells is None:
            continue

        home = _team(cells.home, cells.home_logo, "home_team")
        away = _team(cells.away, cells.away_logo, "away_team")

        date_text = joined_text(cells.date)
        time_text = joined_text(cells.time) or date_text
        score_text = joined_text(cells.score)
        parsed = parse_score_status(score_text, time_text)

        venue_name = optional_text(cells.location)
        venue = Venue(name=venue_name, address=optional_text(cells.location, 1)) if venue_name else None
        referees = non_empty_texts([c for c in (cells.referee_first, cells.referee_second) if c is not None])

        league_name = response.subtitle.strip() or response.title.strip() or LeagueRef().name
        league = LeagueRef(
            id=response.context_value("league") or "",
            name=league_name,
            game_class=int_or_none(response.context_value("game_class")),
            group=response.context_value("group"),
        )

        return GameDetail(
            id=game_id,
            home_team=home,
            away_team=away,
            home_score=parsed.home_score,
            away_score=parsed.away_score,
            status=parsed.status,
            start_time=parse_start_time(time_text) or "",
            game_date=parse_game_date(date_text, reference) or reference.isoformat(),
            league=league,
            location=venue_name,
            period=extract_period(time_text, score_text) if parsed.status == GameStatus.LIVE else None,
            live_clock=extract_live_clock(parsed.status, time_text),
            layout=cells.layout.value,
            venue=venue,
            coordinates=coordinates(cells.location),
            referees=referees,
            spectators=cell_int(cells.spectators),
        )
    return None


# --- Events -----------------------------------------------------------------


def map_event_row(
    row: Row,
    game_id: str,
    index: int,
    home_name: Optional[str] = None,
    away_name: Optional[str] = None,
) -> Optional[GameEvent]:
    cells = resolve_event_row(row)
    if cells is None:
        return None

    description = joined_text(cells.event)
    classification = classify_event(description)
    team_name = joined_text(cells.team) or None
    player, assist = split_player_assist(joined_text(cells.player))

    return GameEvent(
        id=row.id or f"{game_id}_{index}",
        game_id=game_id,
        time=text_of(cells.time),
        description=description,
        team_side=resolve_team_side(team_name, home_name, away_name),
        team_name=team_name,
        player=player,
        assist=assist,
        event_type=classification.event_type,
        icon=classification.icon,
        display_mode=classification.display_mode,
        score=running_score(description) if classification.event_type in GOAL_EVENT_TYPES else None,
    )


def map_event_rows(
    rows: Sequence[Row],
    game_id: str,
    home_name: Optional[str] = None,
    away_name: Optional[str] = None,
) -> List[GameEvent]:
    """Events in upstream order (newest first); never re-sorted."""
    counter = count()
    return map_rows(
        rows,
        lambda row: map_event_row(row, game_id, next(counter), home_name, away_name),
        EntityKind.GAME_EVENTS,
    )


# --- Rankings ---------------------------------------------------------------


def map_ranking_row(row: Row) -> Optional[RankingRow]:
    cells = resolve_ranking_row(row)
    if cells is None:
        return None

    position = cell_int(cells.position)
    if position is None:
        raise MissingFieldError("Missing required field 'position'")
    team_name = required_text(cells.team, "team_name")
    team_id = link_id(cells.team) or row_link_id(row) or synthesize_id(team_name)

    goals_for, goals_against = parse_pair(joined_text(cells.goals)) or (0, 0)
    difference = cell_int(cells.difference)

    return RankingRow(
        position=position,
        team_id=team_id,
        team_name=team_name,
        team_logo=image_url(cells.logo),
        games=cell_int_or_zero(cells.games),
        wins=cell_int_or_zero(cells.wins),
        draws=cell_int_or_zero(cells.draws),
        losses=cell_int_or_zero(cells.losses),
        overtime_wins=cell_int(cells.overtime_wins),
        overtime_losses=cell_int(cells.overtime_losses),
        goals_for=goals_for,
        goals_against=goals_against,
        goal_difference=difference if difference is not None else goals_for - goals_against,
        points=cell_int_or_zero(cells.points),
    )


# --- Teams ------------------------------------------------------------------


def map_roster_row(row: Row) -> Optional[RosterPlayer]:
    cells = resolve_roster_row(row)
    if cells is None:
        return None
    name = required_text(cells.name, "player_name")
    return RosterPlayer(
        id=link_id(cells.name) or row_link_id(row) or synthesize_id(name),
        name=name,
        number=optional_text(cells.number),
        position=optional_text(cells.position),
        year_of_birth=cell_int(cells.year_of_birth),
        goals=cell_int(cells.goals),
        assists=cell_int(cells.assists),
        points=cell_int(cells.points),
        penalty_minutes=cell_int(cells.penalty_minutes),
    )


def map_team_stats_row(row: Row) -> Optional[TeamSeasonRecord]:
    cells = resolve_team_stats_row(row)
    if cells is None:
        return None
    return TeamSeasonRecord(
        season=required_text(cells.season, "season"),
        league=required_text(cells.league, "league"),
        position=cell_int(cells.position),
        games=cell_int(cells.games),
        wins=cell_int(cells.wins),
        draws=cell_int(cells.draws),
        losses=cell_int(cells.losses),
        points=cell_int(cells.points),
    )


def map_team_competition_row(row: Row) -> Optional[TeamCompetition]:
    cells = resolve_team_competition_row(row)
    if cells is None:
        return None
    name = required_text(cells.name, "competition")
    season = optional_text(cells.season)
    group = optional_text(cells.group)
    return TeamCompetition(
        id=link_id(cells.name) or row_link_id(row) or synthesize_id(" ".join(filter(None, (season, name, group)))),
        name=name,
        season=season,
        group=group,
    )


def _header_cells(response: TabularResponse) -> Dict[str, Cell]:
    """Cells of the first row keyed by their lowercased column header."""
    rows = response.rows
    if not rows:
        return {}
    return {
        header.strip().lower(): cell
        for header, cell in zip(response.headers, rows[0].cells)
        if header.strip()
    }


def _lookup(
    by_header: Dict[str, Cell], cells: Sequence[Cell], keys: Sequence[str], position: int
) -> Optional[Cell]:
    for key in keys:
        if key in by_header:
            return by_header[key]
    # No matching header: fall back to the conventional column
    if not by_header:
        return cell_at(cells, position)
    return None


def map_team_profile(response: TabularResponse, team_id: str) -> Optional[TeamProfile]:
    rows = response.rows
    if not rows:
        return None
    cells = rows[0].cells
    by_header = _header_cells(response)

    name_cell = _lookup(by_header, cells, ("name", "team", "mannschaft"), 0)
    name = joined_text(name_cell) or response.title.strip()
    if not name:
        raise MissingFieldError("Missing required field 'team_name'")
    logo_cell = _lookup(by_header, cells, ("logo",), 1)
    website_cell = _lookup(by_header, cells, ("website", "webseite", "homepage"), 2)
    league_cell = _lookup(by_header, cells, ("liga", "league"), 3)
    address_cell = _lookup(by_header, cells, ("adresse", "address"), 4)

    return TeamProfile(
        id=team_id,
        name=name,
        logo=image_url(logo_cell) or image_url(cell_at(cells, 1)),
        website=link_url(website_cell) or optional_text(website_cell),
        league_name=joined_text(league_cell) or None,
        address=joined_text(address_cell, ", ") or None,
    )


# --- Players ----------------------------------------------------------------

# (header keys, positional fallback) per profile field; cell 0 is the portrait
PLAYER_PROFILE_FIELDS = {
    "club": (("club", "verein", "team"), 1),
    "number": (("nummer", "number", "nr.", "#"), 2),
    "position": (("position",), 3),
    "year_of_birth": (("jahrgang", "year of birth", "geburtsjahr"), 4),
    "height": (("grösse", "größe", "height"), 5),
    "weight": (("gewicht", "weight"), 6),
    "shoots": (("schusshand", "stock", "shoots"), 7),
    "license_type": (("lizenz", "license", "lizenztyp"), 8),
    "nationality": (("nationalität", "nationality"), 9),
}


def map_player_profile(response: TabularResponse, player_id: str) -> Optional[PlayerProfile]:
    rows = response.rows
    if not rows:
        return None
    cells = rows[0].cells
    by_header = _header_cells(response)
    name = response.title.strip() or response.subtitle.strip()
    if not name:
        raise MissingFieldError("Missing required field 'player_name'")

    found = {
        field: _lookup(by_header, cells, keys, position)
        for field, (keys, position) in PLAYER_PROFILE_FIELDS.items()
    }
    club = found["club"]
    return PlayerProfile(
        id=player_id,
        name=name,
        profile_image=image_url(cell_at(cells, 0)),
        club=joined_text(club) or None,
        club_id=link_id(club),
        number=optional_text(found["number"]),
        position=optional_text(found["position"]),
        year_of_birth=cell_int(found["year_of_birth"]),
        height=optional_text(found["height"]),
        weight=optional_text(found["weight"]),
        shoots=optional_text(found["shoots"]),
        license_type=optional_text(found["license_type"]),
        nationality=optional_text(found["nationality"]),
    )


def map_player_stats_row(row: Row) -> Optional[PlayerSeasonStats]:
    cells = resolve_player_stats_row(row)
    if cells is None:
        return None
    return PlayerSeasonStats(
        season=required_text(cells.season, "season"),
        league=joined_text(cells.league),
        team=joined_text(cells.team),
        team_id=link_id(cells.team),
        games=cell_int_or_zero(cells.games),
        goals=cell_int_or_zero(cells.goals),
        assists=cell_int_or_zero(cells.assists),
        points=cell_int_or_zero(cells.points),
        penalties=PenaltyCounts(
            two_minute=cell_int_or_zero(cells.two_minute),
            five_minute=cell_int_or_zero(cells.five_minute),
            ten_minute=cell_int_or_zero(cells.ten_minute),
            match_penalty=cell_int_or_zero(cells.match_penalty),
        ),
    )


def map_player_overview_row(row: Row, reference: date) -> Optional[PlayerGamePerformance]:
    cells = resolve_player_overview_row(row)
    if cells is None:
        return None
    date_text = required_text(cells.date, "game_date")
    return PlayerGamePerformance(
        game_date=parse_game_date(date_text, reference) or date_text,
        venue=joined_text(cells.venue),
        game_time=parse_start_time(joined_text(cells.time)) or joined_text(cells.time),
        home_team=required_text(cells.home, "home_team"),
        home_team_id=link_id(cells.home),
        away_team=required_text(cells.away, "away_team"),
        away_team_id=link_id(cells.away),
        game_score=joined_text(cells.score),
        goals=cell_int_or_zero(cells.goals),
        assists=cell_int_or_zero(cells.assists),
        points=cell_int_or_zero(cells.points),
        penalty_minutes=cell_int_or_zero(cells.penalty_minutes),
    )
