"""
Shared payload builders and fixtures.

Upstream responses are built as plain dicts in the wire format (regions ->
rows -> cells) and served through httpx.MockTransport, so tests exercise the
real client, model validation and normalization code paths.
"""

import json
from datetime import date
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from unihockey_feed.api.swiss_unihockey_client import SwissUnihockeyClient
from unihockey_feed.models.tabular import Row
from unihockey_feed.normalization.normalizer import Normalizer

TODAY = date(2025, 9, 13)
BASE_URL = "https://api.test/api"


# ============================================================================
# PAYLOAD BUILDERS
# ============================================================================

def cell(*texts: str, ids: Optional[List[Any]] = None, image: Optional[str] = None,
         link_type: str = "team", url: Optional[str] = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {"text": list(texts)}
    if ids is not None or url is not None:
        data["link"] = {"type": link_type, "ids": ids or [], "url": url}
    if image is not None:
        data["image"] = {"url": image}
    return data


def image_cell(url: str) -> Dict[str, Any]:
    return {"text": [], "image": {"url": url}}


def row(cells: List[Dict[str, Any]], row_id: Any = None, link_ids: Optional[List[Any]] = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {"cells": cells}
    if row_id is not None:
        data["id"] = row_id
    if link_ids is not None:
        data["link"] = {"type": "game", "ids": link_ids}
    return data


def region(rows: List[Dict[str, Any]], label: str = "Herren GF L-UPL") -> Dict[str, Any]:
    return {"text": label, "rows": rows}


def payload(regions: List[Dict[str, Any]], **extra: Any) -> Dict[str, Any]:
    """Wraps regions in the upstream `data` envelope."""
    return {"data": {"title": extra.pop("title", ""), "regions": regions, **extra}}


def list_game_row(home: str = "Zug United", away: str = "Kloten-Dietlikon Jets",
                  score: str = "5:3", when: List[str] = ("13.09.2025", "19:30"),
                  game_id: Any = 1001, home_id: Any = 429523, away_id: Any = 429524) -> Dict[str, Any]:
    # [datetime, location, home, homeLogo, sep, awayLogo, away, score]
    return row(
        [
            cell(*when),
            cell("Sporthalle Herti", "Zug"),
            cell(home, ids=[home_id] if home_id is not None else None),
            image_cell("https://img.test/home.png"),
            cell("-"),
            image_cell("https://img.test/away.png"),
            cell(away, ids=[away_id] if away_id is not None else None),
            cell(score),
        ],
        link_ids=[game_id] if game_id is not None else None,
    )


def current_game_row(home: str = "Zug United", away: str = "Kloten-Dietlikon Jets",
                     score: str = "", time: str = "19:30", game_id: Any = None) -> Dict[str, Any]:
    # [time, home, sep, away, score]
    return row(
        [cell(time), cell(home), cell("-"), cell(away), cell(score)],
        link_ids=[game_id] if game_id is not None else None,
    )


def team_game_row(game_id: Any, home: str = "Zug United", away: str = "UHC Uster",
                  score: str = "4:2", when: str = "06.09.2025 18:00") -> Dict[str, Any]:
    # [datetime, location, league, home, away, score]
    return row(
        [cell(when), cell("Sporthalle Herti"), cell("Herren GF L-UPL"), cell(home, ids=[1]),
         cell(away, ids=[2]), cell(score)],
        link_ids=[game_id],
    )


def detail_payload(home: str = "Zug United", away: str = "Kloten-Dietlikon Jets",
                   score: str = "4:4", when: str = "13.09.2025 19:30") -> Dict[str, Any]:
    # compact detail layout: [home, away, score, datetime, location, ref1, ref2, spectators]
    return payload(
        [region([row([
            cell(home, ids=[429523]),
            cell(away, ids=[429524]),
            cell(score),
            cell(when),
            cell("Sporthalle Herti", "Zug"),
            cell("Meier"),
            cell("Müller"),
            cell("812"),
        ])], label="")],
        title="Zug United - Kloten-Dietlikon Jets",
        subtitle="Herren GF L-UPL",
    )


def ranking_row(position: int, team: str, team_id: Any, games: int = 10, wins: int = 6,
                draws: int = 1, losses: int = 3, goals: str = "40:30", points: int = 19) -> Dict[str, Any]:
    # standard ranking layout: [pos, logo, team, games, wins, draws, losses, goals, diff, points]
    gf, ga = (int(v) for v in goals.split(":"))
    return row([
        cell(str(position)),
        image_cell(f"https://img.test/{team_id}.png"),
        cell(team, ids=[team_id]),
        cell(str(games)),
        cell(str(wins)),
        cell(str(draws)),
        cell(str(losses)),
        cell(goals),
        cell(f"{gf - ga:+d}"),
        cell(str(points)),
    ])


def parse_rows(rows: List[Dict[str, Any]]) -> List[Row]:
    return [Row.model_validate(r) for r in rows]


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

def json_response(body: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(body), headers={"content-type": "application/json"})


def build_client(handler: Callable[[httpx.Request], httpx.Response], max_attempts: int = 1) -> SwissUnihockeyClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return SwissUnihockeyClient(client=http_client, max_attempts=max_attempts)


@pytest.fixture
def make_normalizer():
    """Factory: Normalizer backed by a MockTransport handler, pinned to TODAY."""

    def factory(handler, league_resolver=None) -> Normalizer:
        return Normalizer(client=build_client(handler), league_resolver=league_resolver, today=lambda: TODAY)

    return factory


@pytest.fixture
def failing_handler():
    """Handler that answers every request with HTTP 500."""

    def handler(request: httpx.Request) -> httpx.Response:
        return json_response({"error": "boom"}, status_code=500)

    return handler
