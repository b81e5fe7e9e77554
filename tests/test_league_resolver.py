import asyncio
import json

from unihockey_feed.services.league_resolver import TeamLeagueDirectory

REGISTRY = {
    "teams": {
        "429523": {"name": "Zug United", "league": {"id": "24", "name": "L-UPL", "gameClass": 11}},
        "429524": {"name": "Kloten-Dietlikon Jets", "league": {"id": "24", "name": "L-UPL", "gameClass": 11}},
        "500001": {"name": "Damen Zug", "league": {"id": "2", "name": "NLB", "gameClass": 21, "group": None}},
        "600000": {"name": "No league"},
    }
}


def test_prefers_first_team_then_second(tmp_path):
    path = tmp_path / "entities.json"
    path.write_text(json.dumps(REGISTRY), encoding="utf-8")
    directory = TeamLeagueDirectory.from_json_file(path)

    first = asyncio.run(directory.resolve("500001", "429523"))
    assert (first.id, first.game_class) == ("2", 21)

    fallback = asyncio.run(directory.resolve("600000", "429524"))
    assert (fallback.id, fallback.name, fallback.game_class) == ("24", "L-UPL", 11)


def test_unknown_teams_resolve_to_none():
    directory = TeamLeagueDirectory(REGISTRY["teams"])
    assert asyncio.run(directory.resolve("1", "2")) is None
    assert directory.league_for_team("600000") is None
