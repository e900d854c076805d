# season_elo/config.py
import math
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()
DATA_DIR = Path(os.getenv("SEASON_ELO_DATA_DIR", "data"))
OUT_DIR = DATA_DIR / "processed"

CONFIG_FILE = "config.json"
RATINGS_FILE = "starting_elo.json"
SCHEDULE_FILE = "schedule.csv"

MARGIN_SCALE = 0.147        # points per logit unit
PROB_EPS = 1e-12


def _num(value, default):
    if value is None or isinstance(value, bool):
        return float(default)
    try:
        out = float(value)
    except (TypeError, ValueError):
        return float(default)
    return out if math.isfinite(out) else float(default)


@dataclass(frozen=True)
class EloConfig:
    K: float = 50.0
    home_field_advantage: float = 25.0
    half_life_weeks: float = 12.0
    mean_elo: float = 1500.0

    @classmethod
    def from_dict(cls, d=None) -> "EloConfig":
        """
        Build a config from a loosely typed mapping (e.g. parsed config.json).
        Each key falls back to its default on its own when missing or not numeric.
        """
        d = d or {}
        defaults = cls()
        return cls(**{k: _num(d.get(k), v) for k, v in asdict(defaults).items()})

    def to_dict(self) -> dict:
        return asdict(self)
