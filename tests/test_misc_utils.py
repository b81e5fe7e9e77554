"""Synthetic ids and season boundaries."""

import re
from datetime import date, datetime

import pytest
from hypothesis import given, strategies as st

from unihockey_feed.utils.misc_utils import calculate_season_year, synthesize_id


@given(st.text(max_size=40))
def test_synthesize_id_is_deterministic_and_clean(name):
    first = synthesize_id(name)
    assert first == synthesize_id(name)
    assert re.fullmatch(r"[a-z0-9_]*", first)


@given(st.text(max_size=40))
def test_synthesize_id_is_idempotent(name):
    once = synthesize_id(name)
    assert synthesize_id(once) == once


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Zug United", "zug_united"),
        ("  Kloten-Dietlikon Jets ", "klotendietlikon_jets"),
        ("UHC Grünenmatt", "uhc_grnenmatt"),
        ("Floorball  Köniz", "floorball__kniz"),
    ],
)
def test_synthesize_id_examples(name, expected):
    assert synthesize_id(name) == expected


@pytest.mark.parametrize(
    "value, season",
    [
        ("2025-08-31", 2024),
        ("2025-09-01", 2025),
        (date(2026, 1, 15), 2025),
        (datetime(2025, 12, 31, 23, 59), 2025),
    ],
)
def test_calculate_season_year(value, season):
    assert calculate_season_year(value) == season
