# unihockey_feed/models/team.py
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TeamProfile(BaseModel):
    """Team details page: name, logo and club metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    logo: Optional[str] = None
    website: Optional[str] = None
    league_name: Optional[str] = None
    address: Optional[str] = None


class RosterPlayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    number: Optional[str] = None
    position: Optional[str] = None
    year_of_birth: Optional[int] = None
    goals: Optional[int] = None
    assists: Optional[int] = None
    points: Optional[int] = None
    penalty_minutes: Optional[int] = None


class TeamSeasonRecord(BaseModel):
    """One season line of a team's history: league, final rank and record."""

    model_config = ConfigDict(frozen=True)

    season: str
    league: str
    position: Optional[int] = None
    games: Optional[int] = None
    wins: Optional[int] = None
    draws: Optional[int] = None
    losses: Optional[int] = None
    points: Optional[int] = None


class TeamCompetition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    season: Optional[str] = None
    group: Optional[str] = None
