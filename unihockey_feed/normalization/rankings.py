"""Ranking disambiguation.

/rankings ignores every filter except `season` and answers with all tables
it knows, each tagged by a tab context. The caller's intent is matched
client-side by narrowing the candidate list in a fixed order; steps marked
"soft" never narrow to zero and back off to the wider set instead.
"""

from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from unihockey_feed.config.leagues import infer_game_class, resolve_league_id, short_league_name
from unihockey_feed.models.enums import EntityKind
from unihockey_feed.models.ranking import RankingCandidate, RankingQuery, RankingTable
from unihockey_feed.models.tabular import Region, TabularResponse

from .extractors import int_or_none
from .mappers import map_ranking_row, map_rows

Narrowing = Callable[[RankingCandidate], bool]


def _context_str(context: Dict[str, Any], key: str) -> Optional[str]:
    value = context.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _candidate(context: Dict[str, Any], full_name: str, season: Optional[str], region_index: Optional[int]) -> RankingCandidate:
    full_name = full_name.strip()
    return RankingCandidate(
        league_id=_context_str(context, "league"),
        game_class=int_or_none(_context_str(context, "game_class")),
        group=_context_str(context, "group"),
        league_name=short_league_name(full_name) if full_name else "",
        full_name=full_name,
        season=_context_str(context, "season") or season,
        region_index=region_index,
    )


def build_candidates(response: TabularResponse, season: Optional[str] = None) -> List[RankingCandidate]:
    """Candidates in upstream declaration order.

    Tabs carry the categorical context. Their rows are only embedded in the
    same response when tab and region counts line up one to one.
    """
    if response.tabs:
        aligned = len(response.tabs) == len(response.regions)
        return [
            _candidate(tab.context, tab.text, season, index if aligned else None)
            for index, tab in enumerate(response.tabs)
        ]

    single = len(response.regions) == 1
    return [
        _candidate(
            response.context if single else {},
            region.label or response.title,
            season or response.context_value("season"),
            index,
        )
        for index, region in enumerate(response.regions)
    ]


def _strict(candidates: List[RankingCandidate], predicate: Narrowing) -> List[RankingCandidate]:
    return [candidate for candidate in candidates if predicate(candidate)]


def _soft(candidates: List[RankingCandidate], predicate: Narrowing, step: str) -> List[RankingCandidate]:
    narrowed = _strict(candidates, predicate)
    if not narrowed:
        logger.debug(f"Ranking step '{step}' would leave no candidates, keeping {len(candidates)}")
        return candidates
    return narrowed


def _covers(tokens: List[str], within: List[str]) -> bool:
    return all(any(token in other for other in within) for token in tokens)


def _name_matches(wanted: str) -> Narrowing:
    """Case-insensitive league-name match.

    The query must sit inside a candidate's name, either as a substring or
    token by token ("Damen NLB" in "Damen GF NLB"). Only a candidate whose
    name is bare, with no gender or field-size prefix, may instead sit inside
    the query, so "Herren KF NLB" never selects "Herren GF NLB".
    """
    wanted = wanted.strip().lower()
    wanted_tokens = wanted.split()

    def matches(candidate: RankingCandidate) -> bool:
        full_name = candidate.full_name.strip().lower()
        league_name = candidate.league_name.strip().lower()
        if any(wanted in name for name in (league_name, full_name) if name):
            return True
        if full_name and _covers(wanted_tokens, full_name.split()):
            return True
        bare = league_name if league_name == full_name or not full_name else ""
        return bool(bare) and _covers(bare.split(), wanted_tokens)

    return matches


def _gender_from_names(names: List[str]) -> Optional[int]:
    for name in names:
        game_class = infer_game_class(name)
        if game_class is not None:
            return game_class
    return None


def disambiguate(candidates: List[RankingCandidate], query: RankingQuery) -> List[RankingCandidate]:
    """Surviving candidates, in upstream order, after all narrowing steps."""
    surviving = list(candidates)

    league_id = resolve_league_id(query.league)
    if league_id is not None:
        surviving = _strict(surviving, lambda c: c.league_id == league_id)

    if query.game_class is not None:
        surviving = _strict(surviving, lambda c: c.game_class == query.game_class)

    if query.league_name and query.league_name.strip():
        surviving = _strict(surviving, _name_matches(query.league_name))

        if len(surviving) > 1:
            game_class = infer_game_class(query.league_name)
            if game_class is not None:
                surviving = _soft(surviving, lambda c: c.game_class == game_class, "league name gender")

    if query.group:
        surviving = _strict(surviving, lambda c: c.group == query.group)

    if len(surviving) > 1 and query.team_names:
        game_class = _gender_from_names(query.team_names)
        if game_class is not None:
            surviving = _soft(surviving, lambda c: c.game_class == game_class, "team name gender")

    return surviving


def describe_query(query: RankingQuery) -> str:
    parts = [
        f"{name}={value}"
        for name, value in query.model_dump(exclude_none=True).items()
        if value not in ("", [])
    ]
    return ", ".join(parts) or "no filters"


def candidate_params(candidate: RankingCandidate, season: Optional[str]) -> Dict[str, Any]:
    """Query parameters that ask upstream for exactly this candidate's table."""
    return {
        "season": candidate.season or season,
        "league": candidate.league_id,
        "game_class": candidate.game_class,
        "group": candidate.group,
    }


def find_region(response: TabularResponse, candidate: RankingCandidate) -> Optional[Region]:
    """Region holding the candidate's rows: by index, then by name, then the first."""
    regions = response.regions
    if candidate.region_index is not None and candidate.region_index < len(regions):
        region = regions[candidate.region_index]
        if region.rows:
            return region
    wanted = candidate.full_name.lower()
    for region in regions:
        if wanted and region.label.strip().lower() == wanted and region.rows:
            return region
    for region in regions:
        if region.rows:
            return region
    return None


def build_table(region: Region, candidate: RankingCandidate, season: Optional[str]) -> RankingTable:
    rows = map_rows(region.rows, map_ranking_row, EntityKind.RANKINGS)
    return RankingTable(
        league_id=candidate.league_id or "",
        league_name=candidate.full_name or region.label or candidate.league_name,
        season=candidate.season or season or "",
        rows=rows,
    )
