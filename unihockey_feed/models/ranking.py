from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class RankingRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int
    team_id: str
    team_name: str
    team_logo: Optional[str] = None
    games: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    overtime_wins: Optional[int] = None
    overtime_losses: Optional[int] = None
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0


class RankingTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    league_id: str
    league_name: str
    season: str
    rows: List[RankingRow] = []


class RankingCandidate(BaseModel):
    """One standings table offered by upstream, with its categorical context."""

    model_config = ConfigDict(frozen=True)

    league_id: Optional[str] = None
    game_class: Optional[int] = None
    group: Optional[str] = None
    league_name: str = ""
    full_name: str = ""
    season: Optional[str] = None
    # Index of the region holding this table's rows in the same response
    region_index: Optional[int] = None


class RankingQuery(BaseModel):
    """What the caller is looking for; every field is optional."""

    model_config = ConfigDict(frozen=True)

    season: Optional[str] = None
    league: Optional[str] = None
    game_class: Optional[int] = None
    group: Optional[str] = None
    league_name: Optional[str] = None
    team_names: List[str] = []


class RankingLookup(BaseModel):
    """Either the selected table, or every candidate plus an explanation."""

    model_config = ConfigDict(frozen=True)

    table: Optional[RankingTable] = None
    candidates: List[RankingCandidate] = []
    message: Optional[str] = None
