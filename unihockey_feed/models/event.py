from typing import Optional

from pydantic import BaseModel, ConfigDict

from .enums import DisplayMode, EventType, TeamSide


class EventClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_type: EventType
    icon: str
    display_mode: DisplayMode


class GameEvent(BaseModel):
    """One entry of a game's timeline, newest first as delivered upstream."""

    model_config = ConfigDict(frozen=True)

    id: str
    game_id: str
    time: str = ""
    description: str = ""
    team_side: TeamSide = TeamSide.NEUTRAL
    team_name: Optional[str] = None
    player: str = ""
    assist: Optional[str] = None
    event_type: EventType = EventType.OTHER
    icon: str = "info"
    display_mode: DisplayMode = DisplayMode.INLINE
    # Running score for goal events, e.g. "3:1"
    score: Optional[str] = None
