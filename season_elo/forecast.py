# season_elo/forecast.py
"""
Forecasts for games that have not been played yet.

A forecast never touches ratings: it reads the final rating map, adds the
home-field bonus to the home side and converts the resulting win probability
into a point spread through the logit.
"""
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd

from season_elo.config import EloConfig, MARGIN_SCALE, PROB_EPS
from season_elo.games import GameRecord, future_games


@dataclass(frozen=True)
class Forecast:
    home_team: str
    away_team: str
    favored: str
    win_prob: float
    margin: float
    week: Optional[int] = None


MAX_EXP = 300.0             # keeps 10 ** x finite


def win_probability(home_rating, away_rating, hfa):
    """Home win probability; works on scalars or numpy arrays of ratings."""
    x = -(home_rating + hfa - away_rating) / 400
    return 1.0 / (1 + 10 ** np.minimum(x, MAX_EXP))


def clamp_prob(p):
    return np.clip(p, PROB_EPS, 1 - PROB_EPS)


def logit_margin(p):
    p = clamp_prob(p)
    return np.log(p / (1 - p)) / MARGIN_SCALE


def forecast_game(game: GameRecord, ratings: Mapping[str, float],
                  config: Optional[EloConfig] = None) -> Forecast:
    config = config or EloConfig()
    home, away = game.home, game.away
    home_elo = ratings.get(home, config.mean_elo)
    away_elo = ratings.get(away, config.mean_elo)

    p_home = float(win_probability(home_elo, away_elo, config.home_field_advantage))
    favored = home if p_home > 0.5 else away
    p = float(clamp_prob(p_home if favored == home else 1 - p_home))
    return Forecast(home_team=home, away_team=away, favored=favored,
                    win_prob=p, margin=float(logit_margin(p)), week=game.week)


def _ranked(forecasts: List[Forecast]) -> List[Forecast]:
    return sorted(forecasts, key=lambda f: f.win_prob, reverse=True)


def predict_week(games: Iterable[GameRecord], ratings, config=None, week: int = None) -> List[Forecast]:
    """Forecasts for one week's unplayed games, most confident first."""
    todo = [g for g in future_games(games) if g.week == week]
    return _ranked([forecast_game(g, ratings, config) for g in todo])


def predict_team(games: Iterable[GameRecord], ratings, config=None, team: str = None) -> List[Forecast]:
    """Forecasts for a team's remaining games, most confident first."""
    todo = [g for g in future_games(games) if g.involves(team)]
    return _ranked([forecast_game(g, ratings, config) for g in todo])


def forecast_frame(games: Iterable[GameRecord], ratings: Mapping[str, float],
                   config: Optional[EloConfig] = None) -> pd.DataFrame:
    """
    Vectorised version of forecast_game over every unplayed game.
    Returns one row per game: week, home, away, p_home_win, favored, win_prob, margin.
    """
    config = config or EloConfig()
    todo = future_games(games)
    cols = ["week", "home", "away", "p_home_win", "favored", "win_prob", "margin"]
    if not todo:
        return pd.DataFrame(columns=cols)

    meta = pd.DataFrame({
        "week": [g.week for g in todo],
        "home": [g.home for g in todo],
        "away": [g.away for g in todo],
    })
    home_elo = np.array([ratings.get(t, config.mean_elo) for t in meta["home"]], dtype=float)
    away_elo = np.array([ratings.get(t, config.mean_elo) for t in meta["away"]], dtype=float)

    p_home = win_probability(home_elo, away_elo, config.home_field_advantage)
    home_fav = p_home > 0.5
    p = clamp_prob(np.where(home_fav, p_home, 1 - p_home))

    return meta.assign(
        p_home_win=p_home,
        favored=np.where(home_fav, meta["home"], meta["away"]),
        win_prob=p,
        margin=logit_margin(p),
    )[cols]
