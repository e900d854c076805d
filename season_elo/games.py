# season_elo/games.py
import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

_NON_NUMERIC = re.compile(r"[^\d.-]")


def to_score(value) -> Optional[float]:
    """
    Coerce a raw score cell to a finite float, or None.
    Blank cells, text and NaN/inf all mean "not played yet".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    cleaned = _NON_NUMERIC.sub("", str(value)).strip()
    if not cleaned:
        return None
    try:
        out = float(cleaned)
    except ValueError:
        return None
    return out if math.isfinite(out) else None


def to_week(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(str(value).strip())
    except ValueError:
        return None
    return int(out) if math.isfinite(out) else None


def _team(value) -> Optional[str]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return str(value).strip() or None


def _is_away_marker(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip() == "@" if value is not None else False


@dataclass(frozen=True)
class GameRecord:
    week: Optional[int]
    winner: Optional[str]
    loser: Optional[str]
    winner_score: Optional[float] = None
    loser_score: Optional[float] = None
    winner_is_away: bool = False

    @classmethod
    def from_row(cls, row) -> "GameRecord":
        """Build a record from one schedule row (dict-like, keys as in the CSV loader)."""
        return cls(
            week=to_week(row.get("week")),
            winner=_team(row.get("winner")),
            loser=_team(row.get("loser")),
            winner_score=to_score(row.get("winner_score")),
            loser_score=to_score(row.get("loser_score")),
            winner_is_away=_is_away_marker(row.get("winner_is_away")),
        )

    @property
    def is_completed(self) -> bool:
        return to_score(self.winner_score) is not None and to_score(self.loser_score) is not None

    @property
    def home(self) -> Optional[str]:
        return self.loser if self.winner_is_away else self.winner

    @property
    def away(self) -> Optional[str]:
        return self.winner if self.winner_is_away else self.loser

    def involves(self, team: str) -> bool:
        return team in (self.winner, self.loser)


def completed_games(games: Iterable[GameRecord]) -> List[GameRecord]:
    return [g for g in games if g.is_completed]


def future_games(games: Iterable[GameRecord]) -> List[GameRecord]:
    return [g for g in games if not g.is_completed]

