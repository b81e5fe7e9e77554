from enum import Enum


class GameStatus(str, Enum):
    UPCOMING = "upcoming"
    LIVE = "live"
    FINISHED = "finished"


class TeamSide(str, Enum):
    HOME = "home"
    AWAY = "away"
    NEUTRAL = "neutral"


class DisplayMode(str, Enum):
    INLINE = "inline"
    BADGE = "badge"
    NEUTRAL = "neutral"


class EventType(str, Enum):
    GOAL = "goal"
    OWN_GOAL = "own_goal"
    PENALTY_2MIN = "penalty_2min"
    PENALTY_2PLUS2 = "penalty_2plus2"
    PENALTY_5MIN = "penalty_5min"
    PENALTY_10MIN = "penalty_10min"
    MATCH_PENALTY = "match_penalty"
    PENALTY = "penalty"
    PENALTY_SHOT = "penalty_shot"
    TIMEOUT = "timeout"
    BEST_PLAYER = "best_player"
    GAME_START = "game_start"
    GAME_END = "game_end"
    PERIOD_START = "period_start"
    PERIOD_END = "period_end"
    OVERTIME_START = "overtime_start"
    SHOOTOUT = "shootout"
    OTHER = "other"


class EntityKind(str, Enum):
    GAME_LISTING = "game_listing"
    GAME_DETAIL = "game_detail"
    GAME_EVENTS = "game_events"
    TEAM_ROSTER = "team_roster"
    TEAM_SCHEDULE = "team_schedule"
    RANKINGS = "rankings"
    HEAD_TO_HEAD = "head_to_head"
    PLAYER_STATISTICS = "player_statistics"
    PLAYER_OVERVIEW = "player_overview"
    TEAM_STATISTICS = "team_statistics"
    TEAM_COMPETITIONS = "team_competitions"


class GameMode(str, Enum):
    """Values of the upstream `mode` query parameter on /games."""

    CURRENT = "current"
    LIST = "list"
    TEAM = "team"
    DIRECT = "direct"
