# season_elo/records.py
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

import pandas as pd

from season_elo.config import EloConfig
from season_elo.forecast import win_probability
from season_elo.games import GameRecord


@dataclass
class TeamRecord:
    wins: int = 0
    losses: int = 0
    proj_wins: float = 0.0
    proj_losses: float = 0.0

    @property
    def total_wins(self) -> float:
        return self.wins + self.proj_wins

    @property
    def total_losses(self) -> float:
        return self.losses + self.proj_losses


def projected_records(ratings: Mapping[str, float], games: Iterable[GameRecord],
                      config: Optional[EloConfig] = None) -> Dict[str, TeamRecord]:
    """
    Current W-L from played games plus expected wins/losses from the rest of
    the schedule. Only teams present in `ratings` get a record.
    """
    config = config or EloConfig()
    hfa = config.home_field_advantage
    records = {team: TeamRecord() for team in ratings}

    for g in games:
        if g.is_completed:
            if g.winner in records:
                records[g.winner].wins += 1
            if g.loser in records:
                records[g.loser].losses += 1
            continue

        home, away = g.home, g.away
        if home not in records or away not in records:
            continue
        p_home = float(win_probability(ratings[home], ratings[away], hfa))
        records[home].proj_wins += p_home
        records[home].proj_losses += 1 - p_home
        records[away].proj_wins += 1 - p_home
        records[away].proj_losses += p_home

    return records


def records_table(records: Mapping[str, TeamRecord], ratings: Mapping[str, float]) -> pd.DataFrame:
    rows = [
        {
            "team": team,
            "wins": r.wins,
            "losses": r.losses,
            "proj_wins": r.proj_wins,
            "proj_losses": r.proj_losses,
            "total_wins": r.total_wins,
            "total_losses": r.total_losses,
            "elo": ratings.get(team),
        }
        for team, r in records.items()
    ]
    cols = ["team", "wins", "losses", "proj_wins", "proj_losses", "total_wins", "total_losses", "elo"]
    df = pd.DataFrame(rows, columns=cols)
    return df.sort_values("total_wins", ascending=False, kind="mergesort").reset_index(drop=True)
