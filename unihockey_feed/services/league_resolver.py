"""League resolution for a pair of teams.

The facade only depends on the `LeagueResolver` protocol. `TeamLeagueDirectory`
is the in-process implementation backed by an entity registry
(`{"teams": {"<team id>": {"league": {...}}}}`).
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ResolvedLeague(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: Optional[str] = None
    game_class: Optional[int] = Field(None, alias="gameClass")
    group: Optional[str] = None


class LeagueResolver(Protocol):
    async def resolve(self, team_a: str, team_b: str) -> Optional[ResolvedLeague]:
        ...


class TeamLeagueDirectory:
    """Team id -> league lookup; prefers the first team's league."""

    def __init__(self, teams: Optional[Mapping[str, Any]] = None):
        self._leagues: Dict[str, ResolvedLeague] = {}
        for team_id, entry in (teams or {}).items():
            league = entry.get("league") if isinstance(entry, Mapping) else None
            if not league:
                continue
            try:
                self._leagues[str(team_id)] = ResolvedLeague.model_validate(league)
            except ValidationError as e:
                logger.warning(f"Ignoring invalid league entry for team {team_id}: {e}")
        logger.info(f"TeamLeagueDirectory initialized with {len(self._leagues)} teams.")

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "TeamLeagueDirectory":
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        return cls(payload.get("teams", {}))

    def league_for_team(self, team_id: str) -> Optional[ResolvedLeague]:
        return self._leagues.get(str(team_id))

    async def resolve(self, team_a: str, team_b: str) -> Optional[ResolvedLeague]:
        return self.league_for_team(team_a) or self.league_for_team(team_b)
