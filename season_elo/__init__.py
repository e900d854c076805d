# season_elo/__init__.py
from season_elo.config import EloConfig
from season_elo.elo import compute_final_ratings
from season_elo.forecast import forecast_game, win_probability
from season_elo.games import GameRecord
from season_elo.records import projected_records
