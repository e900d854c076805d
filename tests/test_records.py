"""Tests for current and projected season records."""

import pytest

from season_elo.elo import compute_final_ratings
from season_elo.forecast import win_probability
from season_elo.games import GameRecord
from season_elo.records import TeamRecord, projected_records, records_table


def test_played_and_projected_totals(config, a_beats_b, a_vs_c):
    games = [a_beats_b, a_vs_c]
    ratings = compute_final_ratings({"A": 1500, "B": 1500, "C": 1500}, games, config)
    records = projected_records(ratings, games, config)

    p_a = win_probability(ratings["A"], ratings["C"], 25)
    a = records["A"]
    assert (a.wins, a.losses) == (1, 0)
    assert a.proj_wins == pytest.approx(p_a)
    assert a.proj_losses == pytest.approx(1 - p_a)
    assert a.total_wins == pytest.approx(1 + p_a)
    assert a.total_wins != int(a.total_wins)

    c = records["C"]
    assert (c.wins, c.losses) == (0, 0)
    assert c.proj_wins == pytest.approx(1 - p_a)
    assert c.total_losses == pytest.approx(p_a)

    assert records["B"] == TeamRecord(wins=0, losses=1)


def test_unrated_teams_are_skipped(config):
    games = [
        GameRecord(week=1, winner="A", loser="Z", winner_score=7, loser_score=3),
        GameRecord(week=2, winner="A", loser="Y"),
    ]
    records = projected_records({"A": 1500.0}, games, config)
    assert set(records) == {"A"}
    assert records["A"].wins == 1
    assert records["A"].proj_wins == 0.0


def test_projected_wins_and_losses_sum_to_games_left(config):
    ratings = {"A": 1580.0, "B": 1490.0, "C": 1430.0}
    games = [
        GameRecord(week=3, winner="A", loser="B"),
        GameRecord(week=3, winner="C", loser="A", winner_is_away=True),
        GameRecord(week=4, winner="B", loser="C"),
    ]
    records = projected_records(ratings, games, config)
    assert sum(r.proj_wins for r in records.values()) == pytest.approx(3)
    for r in records.values():
        assert r.proj_wins + r.proj_losses == pytest.approx(2)


def test_records_table_sorted_by_total_wins(config):
    ratings = {"A": 1580.0, "B": 1490.0, "C": 1430.0}
    games = [
        GameRecord(week=1, winner="C", loser="A", winner_score=20, loser_score=13),
        GameRecord(week=1, winner="C", loser="B", winner_score=20, loser_score=13),
        GameRecord(week=2, winner="A", loser="B"),
    ]
    table = records_table(projected_records(ratings, games, config), ratings)

    assert table["team"].iloc[0] == "C"
    assert list(table["total_wins"]) == sorted(table["total_wins"], reverse=True)
    assert table.loc[table["team"] == "A", "elo"].item() == 1580.0
    assert list(table.columns) == [
        "team", "wins", "losses", "proj_wins", "proj_losses", "total_wins", "total_losses", "elo",
    ]
