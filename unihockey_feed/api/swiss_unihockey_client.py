# unihockey_feed/api/swiss_unihockey_client.py

from typing import Any, Dict, Optional

from unihockey_feed.models.tabular import TabularResponse

from .base_client import BaseApiClient


class SwissUnihockeyClient(BaseApiClient):
    """Endpoint wrappers for the Swiss Unihockey API v2.

    Every method returns the parsed Tabular Response Model and raises the
    ApiError family on transport failure. No interpretation happens here.
    """

    name = "swissunihockey"

    async def _get_table(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> TabularResponse:
        payload = await self._get_json(url, params)
        return TabularResponse.from_payload(payload)

    async def get_games(self, params: Dict[str, Any]) -> TabularResponse:
        """GET /games; `mode` selects current/list/team/direct."""
        return await self._get_table("/games", params)

    async def get_game(self, game_id: str) -> TabularResponse:
        return await self._get_table(f"/games/{game_id}")

    async def get_game_events(self, game_id: str) -> TabularResponse:
        return await self._get_table(f"/game_events/{game_id}")

    async def get_team(self, team_id: str) -> TabularResponse:
        return await self._get_table(f"/teams/{team_id}")

    async def get_team_players(self, team_id: str) -> TabularResponse:
        return await self._get_table(f"/teams/{team_id}/players")

    async def get_team_statistics(self, team_id: str) -> TabularResponse:
        return await self._get_table(f"/teams/{team_id}/statistics")

    async def get_team_competitions(self, team_id: str) -> TabularResponse:
        return await self._get_table(f"/teams/{team_id}/competitions")

    async def get_rankings(self, params: Dict[str, Any]) -> TabularResponse:
        """GET /rankings. Upstream honours `season` only; filter client-side."""
        return await self._get_table("/rankings", params)

    async def get_player(self, player_id: str) -> TabularResponse:
        return await self._get_table(f"/players/{player_id}")

    async def get_player_statistics(self, player_id: str) -> TabularResponse:
        return await self._get_table(f"/players/{player_id}/statistics")

    async def get_player_overview(self, player_id: str) -> TabularResponse:
        return await self._get_table(f"/players/{player_id}/overview")
