from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .enums import GameStatus
from .tabular import Coordinates


class TeamRef(BaseModel):
    """A team as it appears on one side of a game."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(..., min_length=1)
    logo: Optional[str] = None

    @computed_field  # type: ignore[misc]
    @property
    def short_name(self) -> str:
        return self.name.strip()[:3].upper()


class LeagueRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = "Unknown League"
    game_class: Optional[int] = None
    group: Optional[str] = None


class Venue(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    address: Optional[str] = None


class GameSummary(BaseModel):
    """A game as listed in schedules, live tickers and head-to-head views."""

    model_config = ConfigDict(frozen=True)

    id: str
    home_team: TeamRef
    away_team: TeamRef
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    status: GameStatus
    start_time: str = ""
    game_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    league: LeagueRef = LeagueRef()
    location: Optional[str] = None
    period: Optional[str] = None
    live_clock: Optional[str] = None
    layout: Optional[str] = None

    @model_validator(mode="after")
    def _scores_come_in_pairs(self) -> "GameSummary":
        if (self.home_score is None) != (self.away_score is None):
            raise ValueError("home_score and away_score must both be set or both be None")
        return self


class GameDetail(GameSummary):
    """Full game view including venue, officials and the resolved league."""

    venue: Optional[Venue] = None
    coordinates: Optional[Coordinates] = None
    referees: List[str] = []
    spectators: Optional[int] = None
