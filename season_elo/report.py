# season_elo/report.py
from typing import List, Mapping

import pandas as pd

from season_elo.forecast import Forecast


def format_ratings(ratings: Mapping[str, float]) -> str:
    ranked = sorted(ratings.items(), key=lambda kv: kv[1], reverse=True)
    return "\n".join(f"{team}: {elo:.2f}" for team, elo in ranked)


def format_forecast(f: Forecast) -> str:
    return (f"{f.home_team} (Home) vs {f.away_team} → {f.favored} wins, "
            f"Prob: {f.win_prob * 100:.1f}%, Margin: {f.margin:.1f} pts")


def format_predictions(title: str, forecasts: List[Forecast]) -> str:
    return "\n".join([title] + [format_forecast(f) for f in forecasts])


def format_records(table: pd.DataFrame) -> str:
    if table.empty:
        return "No team records available."
    out = pd.DataFrame({
        "Team": table["team"],
        "Current W-L": [f"{w}-{l}" for w, l in zip(table["wins"], table["losses"])],
        "Proj W-L": [f"{w:.1f}-{l:.1f}" for w, l in zip(table["proj_wins"], table["proj_losses"])],
        "Total W-L": [f"{w:.1f}-{l:.1f}" for w, l in zip(table["total_wins"], table["total_losses"])],
        "ELO": [f"{e:.1f}" for e in table["elo"]],
    })
    return out.to_string(index=False)
