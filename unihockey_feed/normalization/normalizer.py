"""Normalization Facade.

Public entry points composing client, layouts, mappers, pagination and
ranking disambiguation. Every operation is total: transport and shape
failures are logged here and turned into the operation's fallback (an empty
list for collections, None for single records).
"""

import asyncio
import functools
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from unihockey_feed.api.swiss_unihockey_client import SwissUnihockeyClient
from unihockey_feed.config.leagues import resolve_league_id
from unihockey_feed.config.settings import settings
from unihockey_feed.models.enums import EntityKind, GameMode
from unihockey_feed.models.event import GameEvent
from unihockey_feed.models.game import GameDetail, GameSummary, LeagueRef
from unihockey_feed.models.player import PlayerGamePerformance, PlayerProfile, PlayerSeasonStats
from unihockey_feed.models.ranking import RankingLookup, RankingQuery
from unihockey_feed.models.tabular import TabularResponse
from unihockey_feed.models.team import RosterPlayer, TeamCompetition, TeamProfile, TeamSeasonRecord
from unihockey_feed.services.league_resolver import LeagueResolver
from unihockey_feed.utils.misc_utils import calculate_season_year

from .mappers import (
    league_from_region,
    map_event_rows,
    map_game_detail,
    map_game_row,
    map_player_overview_row,
    map_player_profile,
    map_player_stats_row,
    map_roster_row,
    map_rows,
    map_team_competition_row,
    map_team_profile,
    map_team_stats_row,
)
from .pagination import Page, paginate
from .rankings import build_candidates, build_table, candidate_params, describe_query, disambiguate, find_region


def with_fallback(fallback: Any):
    """Error boundary: log any failure and return `fallback` (or `fallback()`)."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except Exception as e:
                logger.exception(f"{func.__name__} failed (args={args}, kwargs={kwargs}): {e}")
                return fallback() if callable(fallback) else fallback

        return wrapper

    return decorator


class Normalizer:
    """Turns upstream tabular responses into domain records."""

    def __init__(
        self,
        client: Optional[SwissUnihockeyClient] = None,
        league_resolver: Optional[LeagueResolver] = None,
        today: Callable[[], date] = date.today,
    ):
        self.client = client or SwissUnihockeyClient()
        self.league_resolver = league_resolver
        self._today = today
        logger.info(
            f"Normalizer initialized (league resolver: {type(league_resolver).__name__ if league_resolver else 'none'})."
        )

    async def close(self):
        await self.client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    def _default_season(self, reference: Optional[date] = None) -> str:
        return str(calculate_season_year(reference or self._today()))

    @staticmethod
    def _map_games(response: TabularResponse, reference: date, kind: EntityKind) -> List[GameSummary]:
        games: List[GameSummary] = []
        for region in response.regions:
            league = league_from_region(region, response)
            games.extend(
                map_rows(region.rows, lambda row: map_game_row(row, league, reference, kind), kind)
            )
        return games

    # --- Games --------------------------------------------------------------

    @with_fallback(list)
    async def get_games(
        self,
        on_date: Optional[str] = None,
        league: Optional[str] = None,
        game_class: Optional[int] = None,
        group: Optional[str] = None,
        season: Optional[str] = None,
    ) -> List[GameSummary]:
        """Games scheduled on one day (default: today)."""
        reference = date.fromisoformat(on_date) if on_date else self._today()
        params: Dict[str, Any] = {
            "mode": GameMode.LIST.value,
            "on_date": reference.isoformat(),
            "season": season or self._default_season(reference),
            "league": resolve_league_id(league) or league,
            "game_class": game_class,
            "group": group,
        }
        response = await self.client.get_games(params)
        games = self._map_games(response, reference, EntityKind.GAME_LISTING)
        logger.info(f"Normalized {len(games)} games for {reference.isoformat()}")
        return games

    @with_fallback(list)
    async def get_current_games(self) -> List[GameSummary]:
        """Live and today's games."""
        response = await self.client.get_games({"mode": GameMode.CURRENT.value})
        games = self._map_games(response, self._today(), EntityKind.GAME_LISTING)
        logger.info(f"Normalized {len(games)} current games")
        return games

    @with_fallback(None)
    async def get_game_details(self, game_id: str) -> Optional[GameDetail]:
        response = await self.client.get_game(game_id)
        detail = map_game_detail(response, game_id, self._today())
        if detail is None:
            logger.warning(f"No game detail row found for game {game_id}")
            return None
        return await self._with_resolved_league(detail)

    async def _with_resolved_league(self, detail: GameDetail) -> GameDetail:
        home_id, away_id = detail.home_team.id, detail.away_team.id
        if self.league_resolver is None or not home_id or not away_id:
            return detail
        try:
            resolved = await self.league_resolver.resolve(home_id, away_id)
        except Exception as e:
            logger.warning(f"League resolution failed for {home_id}/{away_id}: {e}")
            return detail
        if resolved is None:
            logger.debug(f"No league found for teams {home_id}/{away_id}")
            return detail
        league = LeagueRef(
            id=resolved.id,
            name=resolved.name or detail.league.name,
            game_class=resolved.game_class,
            group=resolved.group,
        )
        return detail.model_copy(update={"league": league})

    @with_fallback(list)
    async def get_game_events(self, game_id: str) -> List[GameEvent]:
        """Timeline of one game, newest first as upstream delivers it."""
        detail_response, events_response = await asyncio.gather(
            self.client.get_game(game_id),
            self.client.get_game_events(game_id),
            return_exceptions=True,
        )
        if isinstance(events_response, BaseException):
            raise events_response

        home_name = away_name = None
        if isinstance(detail_response, BaseException):
            logger.warning(f"Game detail unavailable for {game_id}, events stay neutral: {detail_response}")
        else:
            try:
                detail = map_game_detail(detail_response, game_id, self._today())
            except Exception as e:
                logger.warning(f"Could not read teams of game {game_id}: {e}")
                detail = None
            if detail is not None:
                home_name, away_name = detail.home_team.name, detail.away_team.name

        events = map_event_rows(events_response.rows, game_id, home_name, away_name)
        logger.info(f"Normalized {len(events)} events for game {game_id}")
        return events

    @with_fallback(list)
    async def get_head_to_head(self, game_id: str) -> List[GameSummary]:
        """Previous meetings of the two teams of a game."""
        response = await self.client.get_games({"mode": GameMode.DIRECT.value, "game_id": game_id})
        games = self._map_games(response, self._today(), EntityKind.HEAD_TO_HEAD)
        return games[: settings.head_to_head_limit]

    # --- Teams --------------------------------------------------------------

    @with_fallback(None)
    async def get_team(self, team_id: str) -> Optional[TeamProfile]:
        response = await self.client.get_team(team_id)
        return map_team_profile(response, team_id)

    @with_fallback(list)
    async def get_team_players(self, team_id: str) -> List[RosterPlayer]:
        response = await self.client.get_team_players(team_id)
        return map_rows(response.rows, map_roster_row, EntityKind.TEAM_ROSTER)

    @with_fallback(list)
    async def get_team_statistics(self, team_id: str) -> List[TeamSeasonRecord]:
        """Season-by-season history of a team, in upstream order."""
        response = await self.client.get_team_statistics(team_id)
        return map_rows(response.rows, map_team_stats_row, EntityKind.TEAM_STATISTICS)

    @with_fallback(list)
    async def get_team_competitions(self, team_id: str) -> List[TeamCompetition]:
        response = await self.client.get_team_competitions(team_id)
        return map_rows(response.rows, map_team_competition_row, EntityKind.TEAM_COMPETITIONS)

    @with_fallback(list)
    async def get_team_games(self, team_id: str, season: Optional[str] = None) -> List[GameSummary]:
        """Full team schedule, fetched page by page."""
        season = season or self._default_season()
        reference = self._today()

        async def fetch_page(page: int) -> Page[GameSummary]:
            response = await self.client.get_games(
                {"mode": GameMode.TEAM.value, "team_id": team_id, "season": season, "page": page}
            )
            games = self._map_games(response, reference, EntityKind.TEAM_SCHEDULE)
            return Page(raw_count=len(response.rows), items=games)

        result = await paginate(
            fetch_page,
            page_size=settings.team_schedule_page_size,
            max_pages=settings.max_schedule_pages,
        )
        logger.info(
            f"Team {team_id}: {len(result.items)} games from {result.pages_fetched} pages "
            f"(stopped: {result.stop_reason.value})"
        )
        return result.items

    # --- Rankings -----------------------------------------------------------

    @with_fallback(None)
    async def get_rankings(
        self,
        season: Optional[str] = None,
        league: Optional[str] = None,
        game_class: Optional[int] = None,
        group: Optional[str] = None,
        league_name: Optional[str] = None,
        team_names: Optional[List[str]] = None,
    ) -> Optional[RankingLookup]:
        """Standings table best matching the request, or every candidate plus a message."""
        season = season or self._default_season()
        query = RankingQuery(
            season=season,
            league=league,
            game_class=game_class,
            group=group,
            league_name=league_name,
            team_names=team_names or [],
        )
        response = await self.client.get_rankings({"season": season})
        candidates = build_candidates(response, season)
        if not candidates:
            return RankingLookup(message=f"No ranking tables available for season {season}")

        surviving = disambiguate(candidates, query)
        if not surviving:
            message = f"No ranking table matches {describe_query(query)}"
            logger.info(f"{message}; offering {len(candidates)} candidates")
            return RankingLookup(candidates=candidates, message=message)

        chosen = surviving[0]
        region = None
        if chosen.region_index is not None and response.regions[chosen.region_index].rows:
            region = response.regions[chosen.region_index]
        else:
            refetched = await self.client.get_rankings(candidate_params(chosen, season))
            region = find_region(refetched, chosen)

        if region is None:
            return RankingLookup(
                candidates=surviving,
                message=f"No standings rows for '{chosen.full_name or chosen.league_name}'",
            )
        table = build_table(region, chosen, season)
        logger.info(f"Selected ranking table '{table.league_name}' with {len(table.rows)} rows")
        return RankingLookup(table=table, candidates=surviving)

    # --- Players ------------------------------------------------------------

    @with_fallback(None)
    async def get_player(self, player_id: str) -> Optional[PlayerProfile]:
        response = await self.client.get_player(player_id)
        return map_player_profile(response, player_id)

    @with_fallback(list)
    async def get_player_statistics(self, player_id: str) -> List[PlayerSeasonStats]:
        response = await self.client.get_player_statistics(player_id)
        return map_rows(response.rows, map_player_stats_row, EntityKind.PLAYER_STATISTICS)

    @with_fallback(list)
    async def get_player_overview(self, player_id: str) -> List[PlayerGamePerformance]:
        response = await self.client.get_player_overview(player_id)
        reference = self._today()
        return map_rows(
            response.rows,
            lambda row: map_player_overview_row(row, reference),
            EntityKind.PLAYER_OVERVIEW,
        )
