from typing import Optional

from pydantic import BaseModel, ConfigDict


class PlayerProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    profile_image: Optional[str] = None
    club: Optional[str] = None
    club_id: Optional[str] = None
    number: Optional[str] = None
    position: Optional[str] = None
    year_of_birth: Optional[int] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    shoots: Optional[str] = None
    license_type: Optional[str] = None
    nationality: Optional[str] = None


class PenaltyCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    two_minute: int = 0
    five_minute: int = 0
    ten_minute: int = 0
    match_penalty: int = 0


class PlayerSeasonStats(BaseModel):
    """One season/team line of a player's statistics table."""

    model_config = ConfigDict(frozen=True)

    season: str
    league: str
    team: str
    team_id: Optional[str] = None
    games: int = 0
    goals: int = 0
    assists: int = 0
    points: int = 0
    penalties: PenaltyCounts = PenaltyCounts()


class PlayerGamePerformance(BaseModel):
    model_config = ConfigDict(frozen=True)

    game_date: str
    venue: str = ""
    game_time: str = ""
    home_team: str
    home_team_id: Optional[str] = None
    away_team: str
    away_team_id: Optional[str] = None
    game_score: str = ""
    goals: int = 0
    assists: int = 0
    points: int = 0
    penalty_minutes: int = 0
