"""
Shared fixtures for season_elo tests.
"""

import json

import pytest

from season_elo.config import EloConfig
from season_elo.games import GameRecord


@pytest.fixture
def config():
    return EloConfig(K=50, home_field_advantage=25, half_life_weeks=12, mean_elo=1500)


@pytest.fixture
def a_beats_b():
    """Week 1, A hosts and beats B 24-10."""
    return GameRecord(week=1, winner="A", loser="B", winner_score=24, loser_score=10, winner_is_away=False)


@pytest.fixture
def a_vs_c():
    """Unplayed week 2 game, C listed first and travelling to A."""
    return GameRecord(week=2, winner="C", loser="A", winner_is_away=True)


SCHEDULE_CSV = (
    "\ufeffWeek,Winner,Pts,@,Loser,Pts\n"
    "1,A,24,,B,10\n"
    "1,C,17,@,D,14\n"
    "2,\"B\",31,@,C,30\n"
    "\n"
    "2,D,,,A,\n"
    "3,A,TBD,@,C,\n"
    "x,A,3,,B,0\n"
)


@pytest.fixture
def schedule_csv():
    return SCHEDULE_CSV


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "config.json").write_text(json.dumps({"K": 50, "home_field_advantage": 25}))
    (tmp_path / "starting_elo.json").write_text(json.dumps({"A": 1500, "B": 1500}))
    (tmp_path / "schedule.csv").write_text(SCHEDULE_CSV, encoding="utf-8")
    return tmp_path
